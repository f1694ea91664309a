from __future__ import annotations

from pathlib import Path

import pytest

from htmldeps.errors import (
    ConfigurationError,
    CountMismatchError,
    HtmlDepsError,
    ManifestError,
    PlaceholderLookupError,
)


def test_placeholder_lookup_error_message() -> None:
    err = PlaceholderLookupError("link://3", "res-id-link")
    assert err.resource_id == "link://3"
    assert err.marker_attr == "res-id-link"
    assert err.reason == "not found"
    assert str(err) == "Placeholder for resource 'link://3' not found (marker attribute 'res-id-link')"


def test_placeholder_lookup_error_is_lookup_error() -> None:
    with pytest.raises(LookupError):
        raise PlaceholderLookupError("inline://0", "res-id-inline", reason="appears 2 times")


def test_count_mismatch_message() -> None:
    err = CountMismatchError(4, 3, "linked paths")
    assert (err.expected, err.actual) == (4, 3)
    assert str(err) == "Expected 4 linked paths, got 3"


def test_manifest_error_includes_path() -> None:
    err = ManifestError("Invalid JSON", Path("out/index.deps.json"))
    assert err.path == Path("out/index.deps.json")
    assert str(err) == f"Invalid JSON ({Path('out/index.deps.json')})"
    assert str(ManifestError("bad")) == "bad"


@pytest.mark.parametrize(
    "err",
    [
        PlaceholderLookupError("link://0", "res-id-link"),
        CountMismatchError(1, 0),
        ConfigurationError("bad selector"),
        ManifestError("bad manifest"),
    ],
)
def test_all_errors_share_base(err: Exception) -> None:
    assert isinstance(err, HtmlDepsError)
