"""Utility helpers for working with the content tree."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator


def iter_index_paths(root: Path, index_name: str = "index.mdx") -> Iterator[Path]:
    """Yield every file named ``index_name`` under ``root``, depth first.

    Entries are visited in sorted name order and directories are descended
    into where they sort, so the output order is stable across runs.
    """
    for child in sorted(root.iterdir(), key=lambda entry: entry.name):
        if child.is_dir():
            yield from iter_index_paths(child, index_name)
        elif child.is_file() and child.name == index_name:
            yield child


def relative_dir(path: Path, root: Path) -> str:
    """POSIX path of ``path``'s directory relative to ``root`` (empty for the root)."""
    relative = path.parent.relative_to(root).as_posix()
    return "" if relative == "." else relative
