"""Tests for core data models."""

from __future__ import annotations

from pathlib import Path

from docsite.models import DocPage, Heading, PrevNext, Route, SearchDocument, TocEntry


class TestSearchDocument:
    """Test SearchDocument serialization."""

    def test_to_dict_keys(self) -> None:
        """Should use the artifact's camelCase keys in a fixed order."""
        document = SearchDocument(
            id="guides/setup",
            title="Setup",
            folder_name="setup",
            content="Install it",
            url="/docs/guides/setup",
            headings=[Heading(text="Install", id="install")],
        )

        data = document.to_dict()

        assert list(data) == ["id", "title", "folderName", "content", "url", "headings"]
        assert data["folderName"] == "setup"
        assert data["headings"] == [{"text": "Install", "id": "install"}]

    def test_default_headings(self) -> None:
        document = SearchDocument(id="", title="", folder_name="", content="", url="/docs/")

        assert document.headings == []

    def test_equality(self) -> None:
        a = SearchDocument(id="a", title="A", folder_name="a", content="", url="/docs/a")
        b = SearchDocument(id="a", title="A", folder_name="a", content="", url="/docs/a")

        assert a == b


class TestTocEntry:
    def test_to_dict(self) -> None:
        entry = TocEntry(level=2, text="Intro", href="#intro")

        assert entry.to_dict() == {"level": 2, "text": "Intro", "href": "#intro"}


class TestPrevNext:
    def test_to_dict_with_missing_neighbour(self) -> None:
        result = PrevNext(prev=None, next=Route(title="Next", href="/next"))

        assert result.to_dict() == {"prev": None, "next": {"title": "Next", "href": "/next"}}


class TestDocPage:
    def test_title_and_description(self) -> None:
        page = DocPage(
            slug="intro",
            path=Path("/docs/intro.mdx"),
            frontmatter={"title": "Intro", "description": "First steps"},
            body="",
        )

        assert page.title == "Intro"
        assert page.description == "First steps"
        assert page.toc == []

    def test_missing_frontmatter_fields(self) -> None:
        page = DocPage(slug="x", path=Path("x.mdx"), frontmatter={}, body="")

        assert page.title == ""
        assert page.description == ""
