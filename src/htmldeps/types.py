from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields, replace
from typing import Generic, TypeVar

from .model.config import InlineKind, LinkKind


@dataclass(frozen=True)
class DocumentType:
    """The DOCTYPE declaration of a document; empty strings mean absent fields."""

    name: str = "html"
    public_id: str = ""
    system_id: str = ""


@dataclass(frozen=True)
class LinkedResource:
    """A resource referenced by URL from an element attribute.

    - id: ``link://<n>`` placeholder id, unique within one extraction session
    - url: resolved absolute URL (or the rewritten path after a build step)
    - kind: which selector matched the element
    - attribute: the attribute that carried the URL (``src`` or ``href``)
    """

    id: str
    url: str
    kind: LinkKind
    attribute: str

    def with_url(self, url: str) -> LinkedResource:
        return replace(self, url=url)


@dataclass(frozen=True)
class InlinedResource:
    """A resource embedded in an element body.

    ``content`` is the element's inner markup as UTF-8 bytes; ``base_path`` is
    the directory URL of the owning document, used to resolve relative imports
    inside the content.
    """

    id: str
    content: bytes
    base_path: str
    kind: InlineKind

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def with_content(self, content: bytes | str) -> InlinedResource:
        if isinstance(content, str):
            content = content.encode("utf-8")
        return replace(self, content=content)


R = TypeVar("R", LinkedResource, InlinedResource)


class _GroupedDeps(Generic[R]):
    def flatten(self) -> list[R]:
        """All resources, grouped by kind in processing order."""

        out: list[R] = []
        for f in fields(self):  # type: ignore[arg-type]
            out.extend(getattr(self, f.name))
        return out

    def ids(self) -> list[str]:
        return [res.id for res in self.flatten()]

    def __len__(self) -> int:
        return sum(len(getattr(self, f.name)) for f in fields(self))  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[R]:
        return iter(self.flatten())


@dataclass
class LinkedDependencies(_GroupedDeps[LinkedResource]):
    js: list[LinkedResource] = field(default_factory=list)
    css: list[LinkedResource] = field(default_factory=list)
    img: list[LinkedResource] = field(default_factory=list)
    ico: list[LinkedResource] = field(default_factory=list)

    def by_kind(self, kind: LinkKind) -> list[LinkedResource]:
        return getattr(self, kind.value)


@dataclass
class InlinedDependencies(_GroupedDeps[InlinedResource]):
    js: list[InlinedResource] = field(default_factory=list)
    css: list[InlinedResource] = field(default_factory=list)
    svg: list[InlinedResource] = field(default_factory=list)

    def by_kind(self, kind: InlineKind) -> list[InlinedResource]:
        return getattr(self, kind.value)


__all__ = [
    "DocumentType",
    "InlinedDependencies",
    "InlinedResource",
    "LinkedDependencies",
    "LinkedResource",
]
