"""Search index build pipeline."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from docsite.ingestion.mdx_loader import build_search_document, read_content
from docsite.models import SearchDocument
from docsite.utils.files import iter_index_paths

LOGGER = logging.getLogger(__name__)


def find_index_documents(content_root: Path, index_name: str = "index.mdx") -> list[Path]:
    """Find all index documents under the content root, in traversal order."""
    return list(iter_index_paths(content_root, index_name))


@dataclass(slots=True)
class IndexStats:
    documents: int = 0
    headings: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def record(self, document: SearchDocument, path: Path) -> None:
        self.documents += 1
        self.headings += len(document.headings)
        self.processed_files.append(path)


class ContentIndexer:
    """Builds search documents for every index document of a content tree.

    Extraction runs concurrently, at most ``max_concurrency`` documents at a
    time. Output order follows discovery order. Any single failure aborts
    the whole build once all reads have finished; the error raised is the
    first failing document in discovery order.
    """

    def __init__(
        self,
        content_root: Path,
        *,
        index_name: str = "index.mdx",
        url_prefix: str = "/docs",
        max_concurrency: int = 32,
    ) -> None:
        self.content_root = Path(content_root)
        self.index_name = index_name
        self.url_prefix = url_prefix
        self.max_concurrency = max_concurrency
        self.stats = IndexStats()

    def build(self) -> List[SearchDocument]:
        """Synchronous entry point for :meth:`build_async`."""
        return asyncio.run(self.build_async())

    async def build_async(self) -> List[SearchDocument]:
        paths = find_index_documents(self.content_root, self.index_name)
        if not paths:
            LOGGER.warning("No %s files found under %s", self.index_name, self.content_root)
            self.stats = IndexStats()
            return []

        LOGGER.info("Indexing %d documents from %s", len(paths), self.content_root)
        limiter = asyncio.Semaphore(self.max_concurrency)
        # let every extraction settle, then report the first failure in discovery order
        results = await asyncio.gather(
            *(self._extract(path, limiter) for path in paths), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        documents: List[SearchDocument] = list(results)

        stats = IndexStats()
        for path, document in zip(paths, documents):
            stats.record(document, path)
        self.stats = stats
        return documents

    async def _extract(self, path: Path, limiter: asyncio.Semaphore) -> SearchDocument:
        async with limiter:
            LOGGER.debug("Processing: %s", path)
            raw_text = await asyncio.to_thread(read_content, path)
            return build_search_document(
                path,
                raw_text,
                content_root=self.content_root,
                url_prefix=self.url_prefix,
            )


def build_index(content_root: Path, **kwargs) -> List[SearchDocument]:
    """Build the search index for ``content_root`` with default settings."""
    return ContentIndexer(content_root, **kwargs).build()
