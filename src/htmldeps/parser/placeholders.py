from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import BeautifulSoup, Tag

from ..errors import CountMismatchError, PlaceholderLookupError
from ..model.config import InlineKind
from ..types import InlinedDependencies
from .document import parse_html

logger = logging.getLogger(__name__)

# kinds whose content is raw text, never markup holding other placeholders
_RAW_TEXT_KINDS = (InlineKind.SCRIPT, InlineKind.STYLE)


class PendingMarkup:
    """Placeholders captured inside inlined content that is not back in the tree yet.

    Changes made to the returned elements are written into the inlined table
    by :meth:`write_back`.
    """

    def __init__(self, inlined: InlinedDependencies, marker_attr: str) -> None:
        self.inlined = inlined
        self.marker_attr = marker_attr
        self._roots: dict[str, BeautifulSoup] = {}
        for res in inlined:
            if res.kind in _RAW_TEXT_KINDS or marker_attr not in res.text:
                continue
            self._roots[res.id] = parse_html(res.text)

    def find_all(self, resource_id: str) -> list[Tag]:
        found: list[Tag] = []
        for root in self._roots.values():
            found.extend(root.find_all(attrs={self.marker_attr: resource_id}))
        return found

    def leftover(self) -> Tag | None:
        for root in self._roots.values():
            elem = root.find(attrs={self.marker_attr: True})
            if elem is not None:
                return elem
        return None

    def write_back(self) -> None:
        for kind in InlineKind:
            items = self.inlined.by_kind(kind)
            for i, res in enumerate(items):
                root = self._roots.get(res.id)
                if root is not None:
                    items[i] = res.with_content("".join(str(node) for node in root.contents))
                    logger.debug("Rewrote placeholders inside %s", res.id)


def is_marked(elem: Tag, marker_attrs: Sequence[str]) -> bool:
    return any(elem.has_attr(attr) for attr in marker_attrs)


def taken_ids(doc: BeautifulSoup, marker_attr: str) -> set[str]:
    """Ids already carried by placeholders in ``doc``."""

    return {str(elem[marker_attr]) for elem in doc.find_all(attrs={marker_attr: True})}


def find_placeholder(
    doc: BeautifulSoup,
    marker_attr: str,
    resource_id: str,
    pending: PendingMarkup | None = None,
) -> Tag:
    """Return the single element whose marker attribute equals ``resource_id``.

    ``pending`` extends the search to inlined markup not yet restored.
    """

    matches = doc.find_all(attrs={marker_attr: resource_id})
    if pending is not None:
        matches.extend(pending.find_all(resource_id))
    if not matches:
        raise PlaceholderLookupError(resource_id, marker_attr)
    if len(matches) > 1:
        raise PlaceholderLookupError(
            resource_id, marker_attr, reason=f"appears {len(matches)} times"
        )
    return matches[0]


def ensure_no_orphans(
    doc: BeautifulSoup, marker_attr: str, pending: PendingMarkup | None = None
) -> None:
    """Fail if any placeholder is left that no table entry claimed."""

    leftover = doc.find(attrs={marker_attr: True})
    if leftover is None and pending is not None:
        leftover = pending.leftover()
    if leftover is not None:
        raise PlaceholderLookupError(
            str(leftover[marker_attr]), marker_attr, reason="has no matching table entry"
        )


def pair_outputs(expected: int, outputs: Sequence[object] | None, what: str) -> None:
    """Check that positional outputs line up one-to-one with extracted inputs."""

    if outputs is not None and len(outputs) != expected:
        logger.debug("Refusing to pair %d %s with %d inputs", len(outputs), what, expected)
        raise CountMismatchError(expected, len(outputs), what)


__all__ = [
    "PendingMarkup",
    "ensure_no_orphans",
    "find_placeholder",
    "is_marked",
    "pair_outputs",
    "taken_ids",
]
