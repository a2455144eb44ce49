"""FastAPI application serving content to the documentation frontend."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from docsite.config import AppConfig
from docsite.content.navigation import RouteTable, load_routes
from docsite.content.pages import PageLoader
from docsite.errors import ContentNotFoundError, DocsError
from docsite.index.indexer import ContentIndexer
from docsite.index.storage import IndexWriter

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="docsite", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class IndexPayload(BaseModel):
    max_concurrency: int | None = Field(default=None, ge=1)


def get_config() -> AppConfig:
    return AppConfig()


def _validate_slug(slug: str) -> str:
    if "\0" in slug:
        raise HTTPException(status_code=400, detail="Invalid slug: contains null byte")
    if any(part == ".." for part in slug.split("/")):
        raise HTTPException(status_code=400, detail="Invalid slug: parent segments are not allowed")
    return slug


def _page_loader(config: AppConfig) -> PageLoader:
    return PageLoader.for_root(
        config.resolve_content_root(Path.cwd()),
        extension=config.extension,
        index_name=config.index_name,
    )


def _route_table(config: AppConfig) -> RouteTable:
    try:
        return load_routes(config.resolve_routes_path(Path.cwd()))
    except DocsError as exc:
        LOGGER.error("Unable to load routes: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/docs/{slug:path}")
async def get_doc(slug: str, config: AppConfig = Depends(get_config)) -> dict[str, Any]:
    """Front matter, raw body, table of contents and neighbours of a page."""
    slug = _validate_slug(slug)
    loader = _page_loader(config)
    try:
        page = await asyncio.to_thread(loader.get_docs_for_slug, slug)
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Page not found: {slug}") from exc
    except DocsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    neighbours = _route_table(config).previous_next(slug)
    return {
        "slug": page.slug,
        "title": page.title,
        "description": page.description,
        "frontmatter": page.frontmatter,
        "body": page.body,
        "toc": [entry.to_dict() for entry in page.toc],
        **neighbours.to_dict(),
    }


@app.get("/toc/{slug:path}")
async def get_toc(slug: str, config: AppConfig = Depends(get_config)) -> dict[str, List[dict[str, Any]]]:
    slug = _validate_slug(slug)
    loader = _page_loader(config)
    try:
        entries = await asyncio.to_thread(loader.get_docs_tocs, slug)
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Page not found: {slug}") from exc
    except DocsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"toc": [entry.to_dict() for entry in entries]}


@app.get("/search-index.json")
async def get_search_index(config: AppConfig = Depends(get_config)) -> List[dict[str, Any]]:
    writer = IndexWriter(config.resolve_output_path(Path.cwd()))
    try:
        return await asyncio.to_thread(writer.read)
    except ContentNotFoundError as exc:
        raise HTTPException(
            status_code=404,
            detail="Search index not found. Build it first with 'docsite build-index'.",
        ) from exc
    except DocsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/index")
async def rebuild_index(payload: IndexPayload, config: AppConfig = Depends(get_config)) -> dict[str, Any]:
    """Rebuild the search index; nothing is written if any document fails."""
    root = config.resolve_content_root(Path.cwd())
    if not root.is_dir():
        raise HTTPException(status_code=404, detail=f"Content root not found: {root}")

    indexer = ContentIndexer(
        root,
        index_name=config.index_name,
        url_prefix=config.url_prefix,
        max_concurrency=payload.max_concurrency or config.max_concurrency,
    )
    writer = IndexWriter(config.resolve_output_path(Path.cwd()))
    try:
        documents = await indexer.build_async()
        output = await asyncio.to_thread(writer.write, documents)
    except (DocsError, OSError) as exc:
        LOGGER.exception("Indexing failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {
        "status": "ok",
        "output": str(output),
        "stats": {
            "documents": indexer.stats.documents,
            "headings": indexer.stats.headings,
            "processed_files": [str(path) for path in indexer.stats.processed_files],
        },
    }
