from __future__ import annotations

from collections.abc import Container

LINK_ID_SCHEME = "link://"
INLINE_ID_SCHEME = "inline://"


class ResourceIdCounter:
    """Allocate resource ids for one extraction session.

    Each scheme has its own sequence starting at ``start``:
    ``link://0, link://1, ...`` and ``inline://0, ...``. Create one counter per
    document; ids are never compared across documents.
    """

    def __init__(self, start: int = 0) -> None:
        self._start = start
        self._next: dict[str, int] = {}

    def next_id(self, scheme: str, taken: Container[str] = ()) -> str:
        """Return the next unused id for ``scheme``, skipping ids in ``taken``."""

        n = self._next.get(scheme, self._start)
        while f"{scheme}{n}" in taken:
            n += 1
        self._next[scheme] = n + 1
        return f"{scheme}{n}"

    def peek(self, scheme: str) -> int:
        return self._next.get(scheme, self._start)

    def reset(self) -> None:
        self._next.clear()
