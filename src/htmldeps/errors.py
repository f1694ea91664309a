"""Exception types raised by htmldeps.

All failures here are deterministic document or data shape errors, so nothing
is retried; callers get the exception as soon as the problem is found.
"""

from __future__ import annotations

from pathlib import Path


class HtmlDepsError(Exception):
    """Base class for all htmldeps errors."""


class PlaceholderLookupError(HtmlDepsError, LookupError):
    """A resource id and the placeholders in a document do not match up.

    Raised when reinsertion cannot find the element for an id, finds more than
    one element for it, or finds a placeholder that no table entry claims.
    """

    def __init__(self, resource_id: str, marker_attr: str, reason: str = "not found") -> None:
        self.resource_id = resource_id
        self.marker_attr = marker_attr
        self.reason = reason
        super().__init__(
            f"Placeholder for resource {resource_id!r} {reason} (marker attribute {marker_attr!r})"
        )


class CountMismatchError(HtmlDepsError, ValueError):
    """The number of transformed outputs differs from the number of extracted inputs."""

    def __init__(self, expected: int, actual: int, what: str = "outputs") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} {what}, got {actual}")


class ConfigurationError(HtmlDepsError, ValueError):
    """Malformed kind, selector or marker configuration."""


class ManifestError(HtmlDepsError, ValueError):
    """A dependency manifest could not be read or has the wrong shape."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


__all__ = [
    "ConfigurationError",
    "CountMismatchError",
    "HtmlDepsError",
    "ManifestError",
    "PlaceholderLookupError",
]
