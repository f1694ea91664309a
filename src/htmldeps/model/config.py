"""Selector and marker configuration for dependency extraction.

Each resource kind is identified by a CSS selector (and, for linked resources,
the attribute that carries the URL). Kinds are processed in enum declaration
order so id allocation is reproducible for identical input.

Note: the marker attributes of the linked and inlined configs must differ, and
problems are reported when a config is built, not in the middle of a scan.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import soupsieve

from ..errors import ConfigurationError


class LinkKind(Enum):
    """Linked (URL-referenced) resource kinds."""

    SCRIPT = "js"
    STYLESHEET = "css"
    IMAGE = "img"
    ICON = "ico"


class InlineKind(Enum):
    """Inlined (embedded) resource kinds."""

    SCRIPT = "js"
    STYLE = "css"
    SVG = "svg"


@dataclass(frozen=True)
class LinkSelector:
    selector: str
    attribute: str


@dataclass(frozen=True)
class InlineSelector:
    selector: str


DEFAULT_LINK_SELECTORS: dict[LinkKind, LinkSelector] = {
    LinkKind.SCRIPT: LinkSelector('script[src]', "src"),
    LinkKind.STYLESHEET: LinkSelector('link[rel="stylesheet"][href]', "href"),
    # also matches embedded base64 images (img[src^="data:"])
    LinkKind.IMAGE: LinkSelector('img[src]', "src"),
    LinkKind.ICON: LinkSelector('link[rel~="icon"][href]', "href"),
}

DEFAULT_INLINE_SELECTORS: dict[InlineKind, InlineSelector] = {
    InlineKind.SCRIPT: InlineSelector("script:not([src])"),
    InlineKind.STYLE: InlineSelector("style"),
    InlineKind.SVG: InlineSelector("svg"),
}

DEFAULT_LINK_ATTR = "res-id-link"
DEFAULT_INLINE_ATTR = "res-id-inline"

_ATTR_NAME_RE = re.compile(r"^[A-Za-z_:][-A-Za-z0-9_:.]*$")


def _check_attr_name(name: str, what: str) -> None:
    if not name or not _ATTR_NAME_RE.match(name):
        raise ConfigurationError(f"Invalid {what} attribute name {name!r}")


def _check_marker_name(name: str) -> None:
    _check_attr_name(name, "marker")
    # the HTML parser lowercases attribute names on reparse
    if name != name.lower():
        raise ConfigurationError(f"Marker attribute name {name!r} must be lowercase")


def _check_selector(selector: str, kind: Enum) -> None:
    if not selector or not selector.strip():
        raise ConfigurationError(f"Empty selector for kind '{kind.value}'")
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise ConfigurationError(
            f"Invalid selector {selector!r} for kind '{kind.value}': {exc}"
        ) from exc


@dataclass
class LinkDepsConfig:
    """Configuration for linked dependencies.

    ``resource_attr`` is the marker attribute that carries a resource's id in
    the stripped document.
    """

    resource_attr: str = DEFAULT_LINK_ATTR
    selectors: dict[LinkKind, LinkSelector] = field(
        default_factory=lambda: dict(DEFAULT_LINK_SELECTORS)
    )

    def __post_init__(self) -> None:
        _check_marker_name(self.resource_attr)
        for kind, sel in self.selectors.items():
            if not isinstance(kind, LinkKind):
                raise ConfigurationError(f"Linked selector key must be a LinkKind, got {kind!r}")
            _check_selector(sel.selector, kind)
            _check_attr_name(sel.attribute, f"resource ('{kind.value}')")
            if sel.attribute.lower() == self.resource_attr.lower():
                raise ConfigurationError(
                    f"Marker attribute {self.resource_attr!r} collides with the resource "
                    f"attribute of kind '{kind.value}'"
                )

    def iter_selectors(self) -> list[tuple[LinkKind, LinkSelector]]:
        return [(kind, self.selectors[kind]) for kind in LinkKind if kind in self.selectors]


@dataclass
class InlineDepsConfig:
    """Configuration for inlined dependencies (selectors only, no attribute)."""

    resource_attr: str = DEFAULT_INLINE_ATTR
    selectors: dict[InlineKind, InlineSelector] = field(
        default_factory=lambda: dict(DEFAULT_INLINE_SELECTORS)
    )

    def __post_init__(self) -> None:
        _check_marker_name(self.resource_attr)
        for kind, sel in self.selectors.items():
            if not isinstance(kind, InlineKind):
                raise ConfigurationError(
                    f"Inlined selector key must be an InlineKind, got {kind!r}"
                )
            _check_selector(sel.selector, kind)

    def iter_selectors(self) -> list[tuple[InlineKind, InlineSelector]]:
        return [(kind, self.selectors[kind]) for kind in InlineKind if kind in self.selectors]


@dataclass
class HtmlDepsConfig:
    """Combined linked and inlined extraction configuration."""

    link: LinkDepsConfig = field(default_factory=LinkDepsConfig)
    inline: InlineDepsConfig = field(default_factory=InlineDepsConfig)

    def __post_init__(self) -> None:
        if self.link.resource_attr.lower() == self.inline.resource_attr.lower():
            raise ConfigurationError(
                f"Linked and inlined configs share the marker attribute "
                f"{self.link.resource_attr!r}"
            )
        link_attrs = {sel.attribute.lower() for sel in self.link.selectors.values()}
        if self.inline.resource_attr.lower() in link_attrs:
            raise ConfigurationError(
                f"Inlined marker attribute {self.inline.resource_attr!r} collides with a "
                f"linked resource attribute"
            )

    @property
    def marker_attrs(self) -> tuple[str, str]:
        return (self.link.resource_attr, self.inline.resource_attr)

    @classmethod
    def from_cli(
        cls,
        *,
        link_attr: str = DEFAULT_LINK_ATTR,
        inline_attr: str = DEFAULT_INLINE_ATTR,
        link_kinds: list[str] | None = None,
        inline_kinds: list[str] | None = None,
    ) -> HtmlDepsConfig:
        """Build a config from CLI argument values.

        Args:
            link_attr: Marker attribute for linked resources
            inline_attr: Marker attribute for inlined resources
            link_kinds: Linked kinds to extract ("js", "css", "img", "ico"); all when empty
            inline_kinds: Inlined kinds to extract ("js", "css", "svg"); all when empty

        Raises:
            ConfigurationError: If a kind name is unknown or the markers are invalid
        """
        link_selected = dict(DEFAULT_LINK_SELECTORS)
        if link_kinds:
            link_selected = {}
            for name in link_kinds:
                try:
                    kind = LinkKind(name)
                except ValueError as exc:
                    valid_values = [k.value for k in LinkKind]
                    raise ConfigurationError(
                        f"Invalid linked kind '{name}'. Valid values: {valid_values}"
                    ) from exc
                link_selected[kind] = DEFAULT_LINK_SELECTORS[kind]

        inline_selected = dict(DEFAULT_INLINE_SELECTORS)
        if inline_kinds:
            inline_selected = {}
            for name in inline_kinds:
                try:
                    ikind = InlineKind(name)
                except ValueError as exc:
                    valid_values = [k.value for k in InlineKind]
                    raise ConfigurationError(
                        f"Invalid inlined kind '{name}'. Valid values: {valid_values}"
                    ) from exc
                inline_selected[ikind] = DEFAULT_INLINE_SELECTORS[ikind]

        return cls(
            link=LinkDepsConfig(resource_attr=link_attr, selectors=link_selected),
            inline=InlineDepsConfig(resource_attr=inline_attr, selectors=inline_selected),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization/logging."""
        return {
            "link_attr": self.link.resource_attr,
            "inline_attr": self.inline.resource_attr,
            "link_kinds": [kind.value for kind, _ in self.link.iter_selectors()],
            "inline_kinds": [kind.value for kind, _ in self.inline.iter_selectors()],
        }


__all__ = [
    "DEFAULT_INLINE_ATTR",
    "DEFAULT_INLINE_SELECTORS",
    "DEFAULT_LINK_ATTR",
    "DEFAULT_LINK_SELECTORS",
    "HtmlDepsConfig",
    "InlineDepsConfig",
    "InlineKind",
    "InlineSelector",
    "LinkDepsConfig",
    "LinkKind",
    "LinkSelector",
]
