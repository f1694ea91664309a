"""One-file loader tying extraction and reinsertion together.

Dataflow:

    extract_deps(html) -> (external build) -> insert_deps(deps)

Each loader handles exactly one HTML file and owns the id counter for it, so
loaders for different files can run side by side without sharing state.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .ids import ResourceIdCounter
from .model.config import HtmlDepsConfig
from .parser.document import parse_html, serialize_html
from .parser.inlined import extract_inlined_deps, restore_inlined_deps
from .parser.linked import extract_linked_deps, restore_linked_deps
from .types import InlinedDependencies, LinkedDependencies
from .urls import get_dir_url_from_file

logger = logging.getLogger(__name__)


@dataclass
class ContentDependencies:
    """The stripped document text and the resources taken out of it."""

    content: str
    linked: LinkedDependencies = field(default_factory=LinkedDependencies)
    inlined: InlinedDependencies = field(default_factory=InlinedDependencies)
    base_path: str = ""

    def import_paths(self) -> list[str]:
        """Linked resource URLs in table order, for use as build entry points."""

        return [res.url for res in self.linked.flatten()]


class HtmlDepsLoader:
    def __init__(self, config: HtmlDepsConfig | None = None, path: str = "./index.html") -> None:
        self.config = config or HtmlDepsConfig()
        self.path = path
        self.base_url = get_dir_url_from_file(path)
        self.counter = ResourceIdCounter()
        self.disposed = False

    def _check_alive(self) -> None:
        if self.disposed:
            raise RuntimeError(f"Loader for {self.path!r} has been disposed")

    def extract_deps(self, content: str) -> ContentDependencies:
        """Parse ``content``, strip linked then inlined resources, serialize."""

        self._check_alive()
        doc = parse_html(content)
        linked = extract_linked_deps(doc, self.base_url, config=self.config, counter=self.counter)
        inlined = extract_inlined_deps(doc, self.base_url, config=self.config, counter=self.counter)
        logger.info(
            "Extracted %d linked and %d inlined resources from %s",
            len(linked),
            len(inlined),
            self.path,
        )
        return ContentDependencies(
            content=serialize_html(doc),
            linked=linked,
            inlined=inlined,
            base_path=self.base_url,
        )

    def insert_deps(
        self,
        deps: ContentDependencies,
        *,
        paths: Sequence[str] | None = None,
        contents: Sequence[bytes | str] | None = None,
    ) -> str:
        """Reinsert resources into the serialized stripped document.

        ``paths`` and ``contents`` optionally replace the linked urls and the
        inlined contents positionally (see ``flatten()`` order). Inlined
        resources are restored before linked ones, the reverse of extraction,
        so linked placeholders captured inside inlined markup are found.
        """

        self._check_alive()
        doc = parse_html(deps.content)
        restore_inlined_deps(doc, deps.inlined, config=self.config, contents=contents)
        restore_linked_deps(doc, deps.linked, config=self.config, paths=paths)
        return serialize_html(doc)

    def dispose(self) -> None:
        """Drop per-file state; the loader cannot be used afterwards."""

        self.counter.reset()
        self.disposed = True


__all__ = ["ContentDependencies", "HtmlDepsLoader"]
