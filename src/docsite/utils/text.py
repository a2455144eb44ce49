"""Text helpers."""

from __future__ import annotations

import re

_NEWLINE_RUNS = re.compile(r"\n+")


def collapse_newlines(text: str) -> str:
    """Replace every run of newlines with a single space and trim the result."""
    return _NEWLINE_RUNS.sub(" ", text).strip()
