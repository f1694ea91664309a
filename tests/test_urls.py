from __future__ import annotations

from pathlib import Path

import pytest

from htmldeps.urls import get_dir_url_from_file, get_uri_scheme, is_absolute_path, resolve_as_url


@pytest.mark.parametrize(
    ("path", "scheme"),
    [
        ("https://cdn.example.com/lib.js", "https"),
        ("http://example.com", "http"),
        ("file:///c:/x.js", "file"),
        ("data:image/png;base64,AAA", "data"),
        ("jsr:@scope/lib", "jsr"),
        ("npm:react", "npm"),
        ("link://3", "link"),
        ("inline://0", "inline"),
        ("/abs/path.js", "local"),
        ("c:/path/to/x.js", "local"),
        ("C:\\path\\x.js", "local"),
        ("./app.js", "relative"),
        ("../app.js", "relative"),
        ("app.js", "relative"),
        ("//cdn.example.com/x.js", "relative"),
        ("", None),
    ],
)
def test_get_uri_scheme(path: str, scheme: str | None) -> None:
    assert get_uri_scheme(path) == scheme


def test_is_absolute_path_agrees_with_scheme_table() -> None:
    assert is_absolute_path("link://0")
    assert is_absolute_path("inline://7")
    assert is_absolute_path("https://example.com/a.js")
    assert is_absolute_path("/usr/share/a.js")
    assert not is_absolute_path("./a.js")
    assert not is_absolute_path("a.js")
    assert not is_absolute_path("")


def test_resolve_relative_against_file_base() -> None:
    assert resolve_as_url("./app.js", "file:///c:/path/to/") == "file:///c:/path/to/app.js"
    assert resolve_as_url("app.js", "file:///c:/path/to/") == "file:///c:/path/to/app.js"
    assert (
        resolve_as_url("../assets/favicon.ico", "file:///z:/path/to/pages/")
        == "file:///z:/path/to/assets/favicon.ico"
    )


def test_resolve_relative_against_http_base() -> None:
    assert resolve_as_url("lib/x.js", "https://example.com/app/") == "https://example.com/app/lib/x.js"
    assert resolve_as_url("//cdn.example.com/x.js", "https://example.com/app/") == (
        "https://cdn.example.com/x.js"
    )


def test_resolve_relative_against_package_scheme_base() -> None:
    base = "jsr:@scope/lib@0.1.0/path/to/"
    assert resolve_as_url("../lib/x.ts", base) == "jsr:@scope/lib@0.1.0/path/lib/x.ts"
    assert resolve_as_url("./", base) == base


def test_non_relative_references_are_returned_unchanged() -> None:
    base = "file:///c:/path/to/"
    for ref in (
        "https://cdn.example.com/lib.js",
        "data:image/png;base64,iVBORw0KGgo...",
        "link://4",
        "npm:normalize-css/style.css",
    ):
        assert resolve_as_url(ref, base) == ref


def test_local_paths_become_file_urls() -> None:
    assert resolve_as_url("c:/path/to/x.js") == "file:///c:/path/to/x.js"
    assert resolve_as_url("c:\\path\\to\\x.js") == "file:///c:/path/to/x.js"
    assert resolve_as_url("/srv/site/x.js", "https://example.com/") == "file:///srv/site/x.js"


def test_empty_reference_resolves_to_base_directory() -> None:
    assert resolve_as_url("", "file:///c:/path/to/") == "file:///c:/path/to/"


class TestDirUrlFromFile:
    def test_drive_path(self) -> None:
        assert get_dir_url_from_file("c:/path/to/index.html") == "file:///c:/path/to/"

    def test_posix_path(self) -> None:
        assert get_dir_url_from_file("/path/to/index.html") == "file:///path/to/"

    def test_http_url(self) -> None:
        assert get_dir_url_from_file("https://example.com/app/index.html") == (
            "https://example.com/app/"
        )

    def test_package_scheme_with_parent_segment(self) -> None:
        assert get_dir_url_from_file("jsr:@scope/lib@0.1.0/path/to/index.html/../") == (
            "jsr:@scope/lib@0.1.0/path/to/"
        )

    def test_relative_path_uses_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert get_dir_url_from_file("./index.html") == tmp_path.resolve().as_uri() + "/"
        assert get_dir_url_from_file() == tmp_path.resolve().as_uri() + "/"
