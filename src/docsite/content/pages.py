"""On-demand page loading for rendering a single document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from docsite.content.resolver import PathResolver
from docsite.content.toc import extract_toc
from docsite.ingestion.mdx_loader import read_content, split_frontmatter
from docsite.models import DocPage, TocEntry

LOGGER = logging.getLogger(__name__)


class PageLoader:
    """Resolve a slug and load its document; one file read per call."""

    def __init__(self, resolver: PathResolver) -> None:
        self.resolver = resolver

    @classmethod
    def for_root(cls, content_root: Path, *, extension: str = ".mdx", index_name: str = "index.mdx") -> PageLoader:
        return cls(PathResolver(content_root, extension=extension, index_name=index_name))

    def get_docs_for_slug(self, slug: str) -> DocPage:
        """Load front matter, body and table of contents for ``slug``.

        The compiled rendering is left to the page layer; failures are logged
        with the slug and re-raised unchanged.
        """
        try:
            path = self.resolver.resolve(slug)
            raw_text = read_content(path)
            metadata, body = split_frontmatter(raw_text, path)
        except Exception as exc:
            LOGGER.error('Error fetching docs for slug "%s": %s', slug, exc)
            raise
        return DocPage(slug=slug, path=path, frontmatter=metadata, body=body, toc=extract_toc(raw_text))

    def get_docs_tocs(self, slug: str) -> List[TocEntry]:
        path = self.resolver.resolve(slug)
        return extract_toc(read_content(path))
