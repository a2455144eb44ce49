"""Command line interface for docsite."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from docsite.config import AppConfig
from docsite.content.navigation import load_routes
from docsite.content.pages import PageLoader
from docsite.content.resolver import PathResolver
from docsite.errors import DocsError
from docsite.index.indexer import ContentIndexer
from docsite.index.storage import IndexWriter
from docsite.web.app import app as web_app

LOGGER = logging.getLogger(__name__)

console = Console()
app = typer.Typer(help="docsite - content resolution and search index tooling")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _config(**overrides) -> AppConfig:
    return AppConfig(**{key: value for key, value in overrides.items() if value is not None})


@app.command("build-index")
def build_index(
    content_root: Path = typer.Option(None, "--content-root", help="Directory holding the MDX content"),
    output: Path = typer.Option(None, "--output", "-o", help="Search index JSON path"),
    concurrency: int = typer.Option(AppConfig().max_concurrency, help="Documents extracted at once"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rebuild the search index from every index document."""
    _setup_logging(verbose)
    config = _config(content_root=content_root, output_path=output, max_concurrency=concurrency)
    root = config.resolve_content_root(Path.cwd())
    output_path = config.resolve_output_path(Path.cwd())

    indexer = ContentIndexer(
        root,
        index_name=config.index_name,
        url_prefix=config.url_prefix,
        max_concurrency=config.max_concurrency,
    )
    try:
        documents = indexer.build()
        IndexWriter(output_path).write(documents)
    except (DocsError, OSError) as exc:
        LOGGER.error("Search index build failed: %s", exc)
        raise typer.Exit(code=1) from exc

    console.print(
        f"Search index generated: [bold]{output_path}[/bold] "
        f"({indexer.stats.documents} documents, {indexer.stats.headings} headings)"
    )


@app.command()
def toc(
    slug: str = typer.Argument(..., help="Content slug, e.g. getting-started/installation"),
    content_root: Path = typer.Option(None, "--content-root", help="Directory holding the MDX content"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the table of contents of a document."""
    _setup_logging(verbose)
    config = _config(content_root=content_root)
    loader = PageLoader.for_root(
        config.resolve_content_root(Path.cwd()),
        extension=config.extension,
        index_name=config.index_name,
    )
    try:
        entries = loader.get_docs_tocs(slug)
    except DocsError as exc:
        LOGGER.error("%s", exc)
        raise typer.Exit(code=1) from exc

    if not entries:
        console.print("[yellow]No headings found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Level")
    table.add_column("Text")
    table.add_column("Href")
    for entry in entries:
        table.add_row(str(entry.level), entry.text, entry.href)
    console.print(table)


@app.command()
def resolve(
    slug: str = typer.Argument(..., help="Content slug"),
    content_root: Path = typer.Option(None, "--content-root", help="Directory holding the MDX content"),
) -> None:
    """Show which file a slug maps to."""
    config = _config(content_root=content_root)
    resolver = PathResolver(
        config.resolve_content_root(Path.cwd()),
        extension=config.extension,
        index_name=config.index_name,
    )
    path = resolver.resolve(slug)
    console.print(str(path), soft_wrap=True)
    if not path.exists():
        console.print("[yellow]Warning: file does not exist.[/yellow]")


@app.command()
def nav(
    path: str = typer.Argument(..., help="Page path without leading slash, e.g. docs/intro"),
    routes: Path = typer.Option(None, "--routes", help="Routes YAML file"),
) -> None:
    """Show the previous and next pages for a route."""
    config = _config(routes_path=routes)
    try:
        table = load_routes(config.resolve_routes_path(Path.cwd()))
    except DocsError as exc:
        LOGGER.error("%s", exc)
        raise typer.Exit(code=1) from exc

    result = table.previous_next(path)
    console.print(f"Previous: {result.prev.href if result.prev else '-'}")
    console.print(f"Next: {result.next.href if result.next else '-'}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the content API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    root = AppConfig().resolve_content_root(Path.cwd())
    if not root.exists():
        console.print(f"[yellow]Warning: content root {root} not found.[/yellow]")

    console.print(f"Starting content API on http://{host}:{port} (content: {root})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
