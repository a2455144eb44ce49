"""Exceptions raised by the content pipeline."""

from __future__ import annotations

from pathlib import Path


class DocsError(Exception):
    """Base class for content resolution and indexing failures."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class ContentNotFoundError(DocsError):
    """The resolved content file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Content file not found")


class ContentIOError(DocsError):
    """Reading a content file failed for a reason other than absence."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Unable to read content file")


class ContentParseError(DocsError):
    """Front matter or markdown could not be parsed."""

    def __init__(self, path: Path, reason: str = "") -> None:
        message = "Invalid content file"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(path, message)
