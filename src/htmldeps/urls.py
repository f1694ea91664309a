"""Path and URL resolution for resource references.

One scheme table drives both :func:`get_uri_scheme` and
:func:`is_absolute_path`, so path joining elsewhere agrees with the resolver.
Besides the usual web and package schemes the table knows the two synthetic
schemes that tag extracted resources (``link://`` and ``inline://``).
"""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urljoin

from .ids import INLINE_ID_SCHEME, LINK_ID_SCHEME

# (prefix, scheme); first match wins, compared case-insensitively
URI_SCHEME_TABLE: tuple[tuple[str, str], ...] = (
    ("jsr:", "jsr"),
    ("npm:", "npm"),
    ("node:", "node"),
    ("data:", "data"),
    ("blob:", "blob"),
    ("http://", "http"),
    ("https://", "https"),
    ("file://", "file"),
    (LINK_ID_SCHEME, "link"),
    (INLINE_ID_SCHEME, "inline"),
)

# schemes that urllib can join against natively
_HIERARCHICAL = {"http", "https", "file"}

_DRIVE_RE = re.compile(r"^[A-Za-z]:[/\\]")


def get_uri_scheme(path: str) -> str | None:
    """Classify the leading scheme of ``path``.

    Returns one of the table's scheme names, ``"local"`` for absolute
    filesystem paths, ``"relative"`` for everything else, or ``None`` for an
    empty string.
    """

    if not path:
        return None
    lowered = path.lower()
    for prefix, scheme in URI_SCHEME_TABLE:
        if lowered.startswith(prefix):
            return scheme
    if path.startswith("//"):
        # protocol-relative, joined against the base's scheme
        return "relative"
    if path.startswith(("/", "\\")) or _DRIVE_RE.match(path):
        return "local"
    return "relative"


def is_absolute_path(segment: str) -> bool:
    scheme = get_uri_scheme(segment) or "relative"
    return scheme != "relative"


def local_path_to_url(path: str) -> str:
    """``c:/a/b`` -> ``file:///c:/a/b``; ``/a/b`` -> ``file:///a/b``."""

    posix = path.replace("\\", "/")
    if not posix.startswith("/"):
        posix = "/" + posix
    return "file://" + posix


def _normalize_segments(path: str) -> str:
    """Collapse ``.`` and ``..`` segments, keeping a trailing slash for directories."""

    leading = "/" if path.startswith("/") else ""
    parts = path.split("/")
    out: list[str] = []
    for part in parts:
        if part in ("", "."):
            continue
        if part == "..":
            if out:
                out.pop()
            continue
        out.append(part)
    trailing = "/" if parts and parts[-1] in ("", ".", "..") and out else ""
    return leading + "/".join(out) + trailing


def _join_opaque(reference: str, base: str) -> str:
    # base like "jsr:@scope/lib@0.1.0/path/to/"
    scheme, _, base_path = base.partition(":")
    directory = base_path[: base_path.rfind("/") + 1]
    if reference.startswith("/"):
        joined = reference
    else:
        joined = directory + reference
    return f"{scheme}:{_normalize_segments(joined)}"


def cwd_url() -> str:
    return Path.cwd().as_uri() + "/"


def resolve_as_url(reference: str, base: str | None = None) -> str:
    """Resolve ``reference`` to an absolute URL string.

    Relative references are joined against ``base`` (a directory URL, default
    the working directory); local filesystem paths become ``file://`` URLs; any
    other scheme is returned as-is.
    """

    scheme = get_uri_scheme(reference)
    if scheme == "local":
        return local_path_to_url(reference)
    if scheme is not None and scheme != "relative":
        return reference

    if base is None:
        base = cwd_url()
    elif get_uri_scheme(base) == "local":
        base = local_path_to_url(base)

    base_scheme = get_uri_scheme(base)
    if base_scheme in _HIERARCHICAL:
        return urljoin(base, reference or "./")
    if base_scheme is None or base_scheme == "relative":
        return urljoin(resolve_as_url(base), reference or "./")
    return _join_opaque(reference or "./", base)


def get_dir_url_from_file(file_path: str = "./index.html") -> str:
    """Return the directory URL (with a trailing slash) containing ``file_path``."""

    scheme = get_uri_scheme(file_path)
    if scheme is None or scheme == "relative":
        file_url = resolve_as_url(file_path, cwd_url())
    else:
        file_url = resolve_as_url(file_path)
    return resolve_as_url("./", file_url)


__all__ = [
    "URI_SCHEME_TABLE",
    "cwd_url",
    "get_dir_url_from_file",
    "get_uri_scheme",
    "is_absolute_path",
    "local_path_to_url",
    "resolve_as_url",
]
