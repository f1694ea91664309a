"""Linked (URL-referenced) dependency extraction and reinsertion.

Each matched element keeps its identity: the URL-bearing attribute is removed
and a marker attribute carrying a ``link://<n>`` id takes its place. All other
attributes stay where they are. Reinsertion reparses the stripped text, finds
each element by its id, and puts the attribute back with the (possibly
rewritten) URL.

| kind  | selector                       | attribute |
|-------|--------------------------------|-----------|
| `js`  | `script[src]`                  | `src`     |
| `css` | `link[rel="stylesheet"][href]` | `href`    |
| `img` | `img[src]`                     | `src`     |
| `ico` | `link[rel~="icon"][href]`      | `href`    |
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import BeautifulSoup

from ..ids import LINK_ID_SCHEME, ResourceIdCounter
from ..model.config import HtmlDepsConfig, LinkDepsConfig
from ..types import InlinedDependencies, LinkedDependencies, LinkedResource
from ..urls import resolve_as_url
from .document import parse_html, serialize_html
from .placeholders import (
    PendingMarkup,
    ensure_no_orphans,
    find_placeholder,
    is_marked,
    pair_outputs,
    taken_ids,
)

logger = logging.getLogger(__name__)


def extract_linked_deps(
    doc: BeautifulSoup,
    base_url: str,
    *,
    config: HtmlDepsConfig | None = None,
    counter: ResourceIdCounter | None = None,
) -> LinkedDependencies:
    """Strip linked resource references from ``doc`` in place.

    ``base_url`` is the directory URL of the document; relative references are
    resolved against it. Elements already carrying a marker attribute (linked
    or inlined) are skipped, so a second call on the same document extracts
    nothing new.
    """

    config = config or HtmlDepsConfig()
    counter = counter or ResourceIdCounter()
    link_config: LinkDepsConfig = config.link
    marker = link_config.resource_attr
    taken = taken_ids(doc, marker)
    deps = LinkedDependencies()

    for kind, sel in link_config.iter_selectors():
        found = deps.by_kind(kind)
        for elem in doc.select(sel.selector):
            if is_marked(elem, config.marker_attrs):
                logger.debug("Skipping already marked <%s> for kind '%s'", elem.name, kind.value)
                continue
            reference = elem.get(sel.attribute)
            if isinstance(reference, list):
                reference = " ".join(reference)
            url = resolve_as_url((reference or "").strip(), base_url)
            rid = counter.next_id(LINK_ID_SCHEME, taken)
            del elem[sel.attribute]
            elem[marker] = rid
            found.append(LinkedResource(id=rid, url=url, kind=kind, attribute=sel.attribute))
            logger.debug("Extracted %s -> %s", rid, url)

    logger.info(
        "Linked dependencies: %s",
        ", ".join(f"{kind.value}={len(deps.by_kind(kind))}" for kind, _ in link_config.iter_selectors()),
    )
    return deps


def restore_linked_deps(
    doc: BeautifulSoup,
    deps: LinkedDependencies,
    *,
    config: HtmlDepsConfig | None = None,
    paths: Sequence[str] | None = None,
    inlined: InlinedDependencies | None = None,
) -> None:
    """Put linked references back into ``doc`` in place.

    When ``paths`` is given it replaces the urls of ``deps.flatten()``
    positionally; its length must match.

    Pass ``inlined`` when inlined resources are still pending: linked
    placeholders captured inside their markup (an ``<img>`` within an
    ``<svg>``) are restored there, and the updated contents are stored back
    into ``inlined``.
    """

    config = config or HtmlDepsConfig()
    marker = config.link.resource_attr
    resources = deps.flatten()
    pair_outputs(len(resources), paths, "linked paths")
    if paths is not None:
        resources = [res.with_url(path) for res, path in zip(resources, paths)]

    pending = PendingMarkup(inlined, marker) if inlined is not None else None
    for res in resources:
        elem = find_placeholder(doc, marker, res.id, pending)
        elem[res.attribute] = res.url
        del elem[marker]
    ensure_no_orphans(doc, marker, pending)
    if pending is not None:
        pending.write_back()


def reinsert_linked_deps(
    stripped_html: str,
    deps: LinkedDependencies,
    *,
    config: HtmlDepsConfig | None = None,
    paths: Sequence[str] | None = None,
    inlined: InlinedDependencies | None = None,
) -> str:
    """Reparse ``stripped_html`` and restore its linked references."""

    doc = parse_html(stripped_html)
    restore_linked_deps(doc, deps, config=config, paths=paths, inlined=inlined)
    return serialize_html(doc)


__all__ = [
    "extract_linked_deps",
    "reinsert_linked_deps",
    "restore_linked_deps",
]
