"""Tests for IndexWriter."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from docsite.errors import ContentNotFoundError, ContentParseError
from docsite.index.indexer import build_index
from docsite.index.storage import IndexWriter
from docsite.models import Heading, SearchDocument


@pytest.fixture
def documents() -> list[SearchDocument]:
    return [
        SearchDocument(
            id="guides",
            title="Guides — überblick",
            folder_name="guides",
            content="Read these first",
            url="/docs/guides",
            headings=[Heading(text="Start", id="start")],
        ),
        SearchDocument(id="api", title="API", folder_name="api", content="", url="/docs/api"),
    ]


class TestIndexWriter:
    """Test writing and reading the search index artifact."""

    def test_write_creates_parents(self, tmp_path: Path, documents) -> None:
        output = tmp_path / "public" / "search-index.json"

        result = IndexWriter(output).write(documents)

        assert result == output
        assert output.exists()

    def test_schema(self, tmp_path: Path, documents) -> None:
        output = tmp_path / "search-index.json"
        IndexWriter(output).write(documents)

        data = json.loads(output.read_text(encoding="utf-8"))

        assert data[0] == {
            "id": "guides",
            "title": "Guides — überblick",
            "folderName": "guides",
            "content": "Read these first",
            "url": "/docs/guides",
            "headings": [{"text": "Start", "id": "start"}],
        }
        assert data[1]["headings"] == []

    def test_pretty_printed(self, tmp_path: Path, documents) -> None:
        output = tmp_path / "search-index.json"
        IndexWriter(output).write(documents)

        text = output.read_text(encoding="utf-8")

        assert text.startswith("[\n  {\n")
        assert "überblick" in text

    def test_overwrites(self, tmp_path: Path, documents) -> None:
        output = tmp_path / "search-index.json"
        output.write_text('[{"stale": true}]')

        IndexWriter(output).write(documents[1:])

        assert IndexWriter(output).read() == [documents[1].to_dict()]

    def test_failed_write_keeps_previous_artifact(self, tmp_path: Path, documents) -> None:
        """A write that dies halfway leaves the old index untouched and no staging file behind."""
        output = tmp_path / "search-index.json"
        output.write_text('[{"previous": true}]', encoding="utf-8")
        previous = output.read_bytes()
        real_write_text = Path.write_text

        def disk_full(path: Path, data: str, *args, **kwargs) -> int:
            real_write_text(path, data[: len(data) // 2], *args, **kwargs)
            raise OSError(28, "No space left on device")

        with patch.object(Path, "write_text", disk_full):
            with pytest.raises(OSError):
                IndexWriter(output).write(documents)

        assert output.read_bytes() == previous
        assert list(tmp_path.iterdir()) == [output]

    def test_no_staging_file_after_success(self, tmp_path: Path, documents) -> None:
        output = tmp_path / "search-index.json"

        IndexWriter(output).write(documents)

        assert list(tmp_path.iterdir()) == [output]

    def test_empty_index(self, tmp_path: Path) -> None:
        output = tmp_path / "search-index.json"
        IndexWriter(output).write([])

        assert output.read_text(encoding="utf-8") == "[]"

    def test_read_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ContentNotFoundError):
            IndexWriter(tmp_path / "missing.json").read()

    def test_read_invalid(self, tmp_path: Path) -> None:
        output = tmp_path / "search-index.json"
        output.write_text("{not json")

        with pytest.raises(ContentParseError):
            IndexWriter(output).read()

    def test_rebuild_is_byte_identical(self, tmp_path: Path) -> None:
        """Two builds over an unchanged tree produce the same bytes."""
        root = tmp_path / "docs"
        for name in ["b", "a", "a/c"]:
            (root / name).mkdir(parents=True, exist_ok=True)
            (root / name / "index.mdx").write_text(f"---\ntitle: {name}\n---\n# {name}\n\n## Section\n\nText")
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"

        IndexWriter(first).write(build_index(root))
        IndexWriter(second).write(build_index(root))

        assert first.read_bytes() == second.read_bytes()
