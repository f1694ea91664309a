from pathlib import Path

import pytest
from typer.testing import CliRunner

from htmldeps import __version__
from htmldeps.cli import app


@pytest.fixture
def html_file(tmp_path: Path, page_html: str) -> Path:
    path = tmp_path / "index.html"
    path.write_text(page_html, encoding="utf-8")
    return path


def test_cli_shows_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "extract" in result.stdout
    assert "reinsert" in result.stdout


def test_cli_version_command() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_cli_version_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"htmldeps version {__version__}" in result.stdout


def test_extract_writes_stripped_html_and_manifest(html_file: Path, isolate_logging) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["extract", str(html_file)])
    assert result.exit_code == 0, result.output

    stripped = html_file.parent / "index.stripped.html"
    manifest = html_file.parent / "index.deps.json"
    assert stripped.exists() and manifest.exists()
    assert "res-id-link" in stripped.read_text(encoding="utf-8")
    assert "Wrote" in result.stdout


def test_extract_to_out_dir_with_kind_filter(
    html_file: Path, tmp_path: Path, isolate_logging
) -> None:
    out_dir = tmp_path / "build"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "-v",
            "extract",
            str(html_file),
            "--out-dir",
            str(out_dir),
            "--base-path",
            "https://example.com/app/index.html",
            "--link-kind",
            "js",
            "--inline-kind",
            "css",
        ],
    )
    assert result.exit_code == 0, result.output

    text = (out_dir / "index.stripped.html").read_text(encoding="utf-8")
    assert 'href="css/site.css"' in text
    assert "<svg" in text and "<circle" in text
    assert "background-color" not in text
    assert "https://example.com/app/app.js" in (out_dir / "index.deps.json").read_text(
        encoding="utf-8"
    )


def test_reinsert_with_path_override(html_file: Path, isolate_logging) -> None:
    runner = CliRunner()
    assert runner.invoke(app, ["extract", str(html_file)]).exit_code == 0

    manifest = html_file.parent / "index.deps.json"
    result = runner.invoke(app, ["reinsert", str(manifest), "--path", "link://0=dist/app.123.js"])
    assert result.exit_code == 0, result.output

    bundled = (html_file.parent / "index.bundled.html").read_text(encoding="utf-8")
    assert '<script src="dist/app.123.js"></script>' in bundled
    assert "res-id-" not in bundled
    assert "background-color: #fff;" in bundled
    assert bundled.startswith('<!DOCTYPE html PUBLIC "HelloSystems" "IBM MainFrame">')


def test_reinsert_custom_output(html_file: Path, tmp_path: Path, isolate_logging) -> None:
    runner = CliRunner()
    assert runner.invoke(app, ["extract", str(html_file)]).exit_code == 0

    out = tmp_path / "dist" / "page.html"
    result = runner.invoke(
        app, ["reinsert", str(html_file.parent / "index.deps.json"), "--out", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert out.exists()


class TestErrors:
    def test_unknown_link_kind(self, html_file: Path, isolate_logging) -> None:
        runner = CliRunner()
        result = runner.invoke(app, ["extract", str(html_file), "--link-kind", "font"])
        assert result.exit_code == 1

    def test_shared_marker(self, html_file: Path, isolate_logging) -> None:
        runner = CliRunner()
        result = runner.invoke(
            app, ["extract", str(html_file), "--link-attr", "data-x", "--inline-attr", "data-x"]
        )
        assert result.exit_code == 1

    def test_malformed_path_override(self, html_file: Path, isolate_logging) -> None:
        runner = CliRunner()
        assert runner.invoke(app, ["extract", str(html_file)]).exit_code == 0
        manifest = html_file.parent / "index.deps.json"
        result = runner.invoke(app, ["reinsert", str(manifest), "--path", "dist/app.js"])
        assert result.exit_code == 1

    def test_unknown_resource_id(self, html_file: Path, isolate_logging) -> None:
        runner = CliRunner()
        assert runner.invoke(app, ["extract", str(html_file)]).exit_code == 0
        manifest = html_file.parent / "index.deps.json"
        result = runner.invoke(app, ["reinsert", str(manifest), "--path", "link://42=x.js"])
        assert result.exit_code == 1
        assert not (html_file.parent / "index.bundled.html").exists()

    def test_broken_manifest(self, tmp_path: Path, isolate_logging) -> None:
        manifest = tmp_path / "index.deps.json"
        manifest.write_text("{", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(app, ["reinsert", str(manifest)])
        assert result.exit_code == 1

    def test_missing_input_file(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(app, ["extract", str(tmp_path / "missing.html")])
        assert result.exit_code != 0


def test_reinsert_uses_markers_recorded_at_extract(html_file: Path, isolate_logging) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app, ["extract", str(html_file), "--link-attr", "data-dep", "--inline-attr", "data-inline"]
    )
    assert result.exit_code == 0, result.output

    manifest = html_file.parent / "index.deps.json"
    result = runner.invoke(app, ["reinsert", str(manifest)])
    assert result.exit_code == 0, result.output

    bundled = (html_file.parent / "index.bundled.html").read_text(encoding="utf-8")
    assert "data-dep" not in bundled and "data-inline" not in bundled
    assert "background-color: #fff;" in bundled
