"""Core docsite data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class TocEntry:
    """Table of contents entry for a single heading line."""

    level: int
    text: str
    href: str

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "text": self.text, "href": self.href}


@dataclass(slots=True)
class Heading:
    """Heading extracted from the parsed document tree."""

    text: str
    id: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "id": self.id}


@dataclass(slots=True)
class SearchDocument:
    """One record of the site search index."""

    id: str
    title: str
    folder_name: str
    content: str
    url: str
    headings: List[Heading] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "folderName": self.folder_name,
            "content": self.content,
            "url": self.url,
            "headings": [heading.to_dict() for heading in self.headings],
        }


@dataclass(slots=True)
class Route:
    title: str
    href: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "href": self.href}


@dataclass(slots=True)
class PrevNext:
    prev: Optional[Route] = None
    next: Optional[Route] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prev": self.prev.to_dict() if self.prev else None,
            "next": self.next.to_dict() if self.next else None,
        }


@dataclass(slots=True)
class DocPage:
    """A content file loaded for rendering."""

    slug: str
    path: Path
    frontmatter: Dict[str, Any]
    body: str
    toc: List[TocEntry] = field(default_factory=list)

    @property
    def title(self) -> str:
        return str(self.frontmatter.get("title") or "")

    @property
    def description(self) -> str:
        return str(self.frontmatter.get("description") or "")
