"""JSON manifest for handing a stripped document and its tables to a build step.

The manifest is deterministic (sorted keys) and written atomically. Inlined
content is stored as UTF-8 text since it always originates from decoded HTML.
The extraction config is recorded too, so reinsertion looks for the same
marker attributes that extraction wrote.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError, ManifestError
from ..loader import ContentDependencies
from ..model.config import (
    DEFAULT_INLINE_ATTR,
    DEFAULT_LINK_ATTR,
    HtmlDepsConfig,
    InlineKind,
    LinkKind,
)
from ..types import InlinedDependencies, InlinedResource, LinkedDependencies, LinkedResource

SCHEMA_VERSION = 1


def deps_to_dict(
    deps: ContentDependencies, config: HtmlDepsConfig | None = None
) -> dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "base_path": deps.base_path,
        "config": (config or HtmlDepsConfig()).to_dict(),
        "content": deps.content,
        "linked": {
            kind.value: [
                {"id": res.id, "url": res.url, "attribute": res.attribute}
                for res in deps.linked.by_kind(kind)
            ]
            for kind in LinkKind
        },
        "inlined": {
            kind.value: [
                {"id": res.id, "content": res.text, "base_path": res.base_path}
                for res in deps.inlined.by_kind(kind)
            ]
            for kind in InlineKind
        },
    }


def deps_from_dict(data: Any, *, path: Path | None = None) -> ContentDependencies:
    """Rebuild ``ContentDependencies`` from its manifest form.

    Raises:
        ManifestError: If the data does not have the manifest shape
    """
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object", path)
    version = data.get("schema_version")
    if version != SCHEMA_VERSION:
        raise ManifestError(f"Unsupported manifest schema_version {version!r}", path)
    content = data.get("content")
    if not isinstance(content, str):
        raise ManifestError("Manifest is missing the stripped 'content'", path)

    linked = LinkedDependencies()
    inlined = InlinedDependencies()
    try:
        for kind in LinkKind:
            for item in data.get("linked", {}).get(kind.value, []):
                linked.by_kind(kind).append(
                    LinkedResource(
                        id=str(item["id"]),
                        url=str(item["url"]),
                        kind=kind,
                        attribute=str(item["attribute"]),
                    )
                )
        for ikind in InlineKind:
            for item in data.get("inlined", {}).get(ikind.value, []):
                inlined.by_kind(ikind).append(
                    InlinedResource(
                        id=str(item["id"]),
                        content=str(item["content"]).encode("utf-8"),
                        base_path=str(item.get("base_path", "")),
                        kind=ikind,
                    )
                )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ManifestError(f"Malformed resource entry: {exc}", path) from exc

    return ContentDependencies(
        content=content,
        linked=linked,
        inlined=inlined,
        base_path=str(data.get("base_path", "")),
    )


def config_from_dict(data: Any, *, path: Path | None = None) -> HtmlDepsConfig:
    """Rebuild the extraction config recorded in a manifest.

    Manifests without a ``config`` entry get the default config.

    Raises:
        ManifestError: If the recorded config is malformed or invalid
    """
    stored = data.get("config") if isinstance(data, dict) else None
    if stored is None:
        return HtmlDepsConfig()
    if not isinstance(stored, dict):
        raise ManifestError("Manifest 'config' must be a JSON object", path)
    try:
        return HtmlDepsConfig.from_cli(
            link_attr=str(stored.get("link_attr", DEFAULT_LINK_ATTR)),
            inline_attr=str(stored.get("inline_attr", DEFAULT_INLINE_ATTR)),
            link_kinds=[str(k) for k in stored.get("link_kinds") or []],
            inline_kinds=[str(k) for k in stored.get("inline_kinds") or []],
        )
    except (ConfigurationError, TypeError) as exc:
        raise ManifestError(f"Invalid recorded config: {exc}", path) from exc


def atomic_write_text(path: Path, data: str, *, encoding: str = "utf-8") -> None:
    """Write ``data`` to a hidden temp file beside ``path``, then move it into place.

    Readers of ``path`` see either the old file or the complete new one; the
    temp file is removed if writing fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_manifest(
    path: Path,
    deps: ContentDependencies,
    *,
    config: HtmlDepsConfig | None = None,
    pretty: bool = True,
) -> None:
    text = json.dumps(
        deps_to_dict(deps, config),
        ensure_ascii=False,
        sort_keys=True,
        indent=2 if pretty else None,
    )
    atomic_write_text(path, text + "\n")


def load_manifest(path: Path) -> tuple[ContentDependencies, HtmlDepsConfig]:
    """Read a manifest and the config its placeholders were written with."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON: {exc}", path) from exc
    deps = deps_from_dict(data, path=path)
    return deps, config_from_dict(data, path=path)


def read_manifest(path: Path) -> ContentDependencies:
    return load_manifest(path)[0]


__all__ = [
    "SCHEMA_VERSION",
    "atomic_write_text",
    "config_from_dict",
    "deps_from_dict",
    "deps_to_dict",
    "load_manifest",
    "read_manifest",
    "write_manifest",
]
