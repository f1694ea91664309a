from __future__ import annotations

from collections.abc import Callable

WrapKeyFn = Callable[[str], str]


def default_wrap(key: str) -> str:
    r"""Wrap ``key`` as ``\{key\}``."""

    return "\\{" + key + "\\}"


class TemplateKvStorage:
    """Key/value pairs that can be substituted into a text template.

    ``add`` returns the wrapped placeholder so it can be written into the
    template right away; ``apply`` replaces every placeholder with its value.
    Values are not escaped: a value that itself contains placeholder syntax
    must be encoded by the caller.
    """

    def __init__(self, wrap: WrapKeyFn = default_wrap) -> None:
        self.wrap = wrap
        self.storage: dict[str, str] = {}

    def add(self, key: str, value: str) -> str:
        """Add (or replace) a pair and return the wrapped key."""

        self.storage[key] = value
        return self.wrap(key)

    def wrap_key(self, key: str) -> str:
        return self.wrap(key)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.storage.get(key, default)

    def keys(self) -> list[str]:
        return list(self.storage.keys())

    def values(self) -> list[str]:
        return list(self.storage.values())

    def entries(self) -> list[tuple[str, str]]:
        return list(self.storage.items())

    def __len__(self) -> int:
        return len(self.storage)

    def __contains__(self, key: object) -> bool:
        return key in self.storage

    def apply(self, template: str) -> str:
        """Replace all occurrences of each wrapped key with its value.

        One full pass over the text per key, in insertion order; substituted
        values are not rescanned for the keys already processed.
        """

        for key, value in self.storage.items():
            template = template.replace(self.wrap(key), value)
        return template


__all__ = ["TemplateKvStorage", "WrapKeyFn", "default_wrap"]
