"""CLI interface for htmldeps."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from htmldeps import __version__
from htmldeps.builder.manifest import atomic_write_text, load_manifest, write_manifest
from htmldeps.errors import HtmlDepsError
from htmldeps.loader import ContentDependencies, HtmlDepsLoader
from htmldeps.model.config import DEFAULT_INLINE_ATTR, DEFAULT_LINK_ATTR, HtmlDepsConfig

app = typer.Typer(
    name="htmldeps",
    help="Extract resource dependencies from HTML files and reinsert them after a build.",
    no_args_is_help=True,
)

console = Console()


def _summary_table(deps: ContentDependencies) -> Table:
    table = Table(title="Extracted resources")
    table.add_column("Type")
    table.add_column("Kind")
    table.add_column("Id")
    table.add_column("Reference")
    for res in deps.linked.flatten():
        table.add_row("linked", res.kind.value, res.id, res.url)
    for ires in deps.inlined.flatten():
        table.add_row("inlined", ires.kind.value, ires.id, f"{len(ires.content)} bytes")
    return table


def _parse_overrides(values: list[str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for raw in values:
        rid, sep, new_path = raw.partition("=")
        if not sep or not rid:
            typer.echo(f"Error: --path expects ID=NEWPATH, got '{raw}'", err=True)
            raise typer.Exit(1)
        overrides[rid] = new_path
    return overrides


@app.command()
def extract(
    html: Annotated[
        Path,
        typer.Argument(
            help="Path to the source HTML file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    base_path: Annotated[
        str | None,
        typer.Option(
            "--base-path",
            help="Path or URL relative references are resolved against (default: the HTML file)",
        ),
    ] = None,
    out_dir: Annotated[
        Path | None,
        typer.Option("--out-dir", help="Output directory (default: next to the HTML file)"),
    ] = None,
    link_attr: Annotated[
        str,
        typer.Option("--link-attr", help="Marker attribute for linked resources"),
    ] = DEFAULT_LINK_ATTR,
    inline_attr: Annotated[
        str,
        typer.Option("--inline-attr", help="Marker attribute for inlined resources"),
    ] = DEFAULT_INLINE_ATTR,
    link_kind: Annotated[
        list[str] | None,
        typer.Option("--link-kind", help="Linked kind to extract (js, css, img, ico); repeatable"),
    ] = None,
    inline_kind: Annotated[
        list[str] | None,
        typer.Option("--inline-kind", help="Inlined kind to extract (js, css, svg); repeatable"),
    ] = None,
) -> None:
    """
    Strip linked and inlined resources from an HTML file.

    Writes <name>.stripped.html and <name>.deps.json next to the input (or to
    --out-dir).

    Examples:

        htmldeps extract site/index.html

        htmldeps extract index.html --base-path https://example.com/app/ --link-kind js
    """
    try:
        config = HtmlDepsConfig.from_cli(
            link_attr=link_attr,
            inline_attr=inline_attr,
            link_kinds=link_kind,
            inline_kinds=inline_kind,
        )
        loader = HtmlDepsLoader(config, path=base_path or str(html.resolve()))
        deps = loader.extract_deps(html.read_text(encoding="utf-8"))
    except HtmlDepsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    target_dir = out_dir or html.parent
    stripped_path = target_dir / f"{html.stem}.stripped.html"
    manifest_path = target_dir / f"{html.stem}.deps.json"
    atomic_write_text(stripped_path, deps.content)
    write_manifest(manifest_path, deps, config=config)

    console.print(_summary_table(deps))
    typer.echo(f"Wrote {stripped_path} and {manifest_path}")


@app.command()
def reinsert(
    manifest: Annotated[
        Path,
        typer.Argument(
            help="Path to a .deps.json manifest written by 'extract'",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output HTML file (default: <name>.bundled.html)"),
    ] = None,
    path: Annotated[
        list[str] | None,
        typer.Option("--path", help="Rewrite a linked resource: ID=NEWPATH; repeatable"),
    ] = None,
    link_attr: Annotated[
        str | None,
        typer.Option(
            "--link-attr",
            help="Marker attribute for linked resources (default: as recorded in the manifest)",
        ),
    ] = None,
    inline_attr: Annotated[
        str | None,
        typer.Option(
            "--inline-attr",
            help="Marker attribute for inlined resources (default: as recorded in the manifest)",
        ),
    ] = None,
) -> None:
    """Restore the resources of a manifest into its stripped HTML."""
    overrides = _parse_overrides(path or [])
    try:
        deps, recorded = load_manifest(manifest)
        config = HtmlDepsConfig.from_cli(
            link_attr=link_attr or recorded.link.resource_attr,
            inline_attr=inline_attr or recorded.inline.resource_attr,
        )
        known = set(deps.linked.ids())
        unknown = sorted(set(overrides) - known)
        if unknown:
            typer.echo(f"Error: unknown linked resource id(s): {', '.join(unknown)}", err=True)
            raise typer.Exit(1)
        paths = [overrides.get(res.id, res.url) for res in deps.linked.flatten()]
        loader = HtmlDepsLoader(config, path=deps.base_path or "./index.html")
        final_html = loader.insert_deps(deps, paths=paths)
    except HtmlDepsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if out is None:
        name = manifest.name
        stem = name[: -len(".deps.json")] if name.endswith(".deps.json") else manifest.stem
        out = manifest.parent / f"{stem}.bundled.html"
    atomic_write_text(out, final_html)
    typer.echo(f"Wrote {out}")


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"htmldeps version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"htmldeps version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log extraction details"),
    ] = False,
) -> None:
    """
    htmldeps - pull resource references out of HTML and put them back after a build.

    For detailed usage, run: htmldeps extract --help
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
