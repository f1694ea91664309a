"""Inlined (embedded) dependency extraction and reinsertion.

The payload of an inlined resource is the element's inner markup, not its
text, so embedded SVG subtrees survive the round trip. The element is emptied
and tagged with an ``inline://<n>`` marker; reinsertion sets the inner content
back from the (possibly transformed) bytes.

| kind  | selector            | example                                   |
|-------|---------------------|-------------------------------------------|
| `js`  | `script:not([src])` | `<script>console.log("hi")</script>`      |
| `css` | `style`             | `<style>body { margin: 0 }</style>`       |
| `svg` | `svg`               | `<svg viewBox="0 0 1 1"><path/></svg>`    |
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import BeautifulSoup

from ..ids import INLINE_ID_SCHEME, ResourceIdCounter
from ..model.config import HtmlDepsConfig
from ..types import InlinedDependencies, InlinedResource
from .document import is_attached, parse_html, serialize_html, set_inner_content
from .placeholders import ensure_no_orphans, find_placeholder, is_marked, pair_outputs, taken_ids

logger = logging.getLogger(__name__)


def extract_inlined_deps(
    doc: BeautifulSoup,
    base_url: str,
    *,
    config: HtmlDepsConfig | None = None,
    counter: ResourceIdCounter | None = None,
) -> InlinedDependencies:
    """Empty inlined resource elements of ``doc`` in place and return their contents.

    Elements nested inside an already extracted element are captured as part
    of the outer element's markup and not extracted on their own.
    """

    config = config or HtmlDepsConfig()
    counter = counter or ResourceIdCounter()
    marker = config.inline.resource_attr
    taken = taken_ids(doc, marker)
    deps = InlinedDependencies()

    for kind, sel in config.inline.iter_selectors():
        found = deps.by_kind(kind)
        for elem in doc.select(sel.selector):
            if is_marked(elem, config.marker_attrs):
                logger.debug("Skipping already marked <%s> for kind '%s'", elem.name, kind.value)
                continue
            if not is_attached(elem, doc):
                continue
            content = elem.decode_contents().encode("utf-8")
            rid = counter.next_id(INLINE_ID_SCHEME, taken)
            elem.clear()
            elem[marker] = rid
            found.append(InlinedResource(id=rid, content=content, base_path=base_url, kind=kind))
            logger.debug("Extracted %s (%d bytes)", rid, len(content))

    logger.info(
        "Inlined dependencies: %s",
        ", ".join(f"{kind.value}={len(deps.by_kind(kind))}" for kind, _ in config.inline.iter_selectors()),
    )
    return deps


def restore_inlined_deps(
    doc: BeautifulSoup,
    deps: InlinedDependencies,
    *,
    config: HtmlDepsConfig | None = None,
    contents: Sequence[bytes | str] | None = None,
) -> None:
    """Put inlined contents back into ``doc`` in place.

    Kinds are restored in reverse extraction order: a placeholder that was
    captured inside another resource's content (a ``<style>`` inside an
    ``<svg>``) only reappears once its container is restored.
    """

    config = config or HtmlDepsConfig()
    marker = config.inline.resource_attr
    resources = deps.flatten()
    pair_outputs(len(resources), contents, "inlined contents")
    if contents is not None:
        resources = [res.with_content(c) for res, c in zip(resources, contents)]

    for res in reversed(resources):
        elem = find_placeholder(doc, marker, res.id)
        set_inner_content(elem, res.text)
        del elem[marker]
    ensure_no_orphans(doc, marker)


def reinsert_inlined_deps(
    stripped_html: str,
    deps: InlinedDependencies,
    *,
    config: HtmlDepsConfig | None = None,
    contents: Sequence[bytes | str] | None = None,
) -> str:
    """Reparse ``stripped_html`` and restore its inlined contents."""

    doc = parse_html(stripped_html)
    restore_inlined_deps(doc, deps, config=config, contents=contents)
    return serialize_html(doc)


__all__ = [
    "extract_inlined_deps",
    "reinsert_inlined_deps",
    "restore_inlined_deps",
]
