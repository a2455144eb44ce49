"""Tests for text utility functions."""

from __future__ import annotations

from docsite.utils.text import collapse_newlines


class TestCollapseNewlines:
    """Test collapse_newlines function."""

    def test_single_newlines(self) -> None:
        assert collapse_newlines("a\nb\nc") == "a b c"

    def test_newline_runs(self) -> None:
        assert collapse_newlines("a\n\n\nb") == "a b"

    def test_trims_edges(self) -> None:
        assert collapse_newlines("\n\n  text \n") == "text"

    def test_keeps_inner_spaces(self) -> None:
        """Only newlines are collapsed, other whitespace stays."""
        assert collapse_newlines("a   b\n\tc") == "a   b \tc"

    def test_empty(self) -> None:
        assert collapse_newlines("") == ""
