"""Pattern based table of contents extraction."""

from __future__ import annotations

import re
from typing import List

from docsite.models import TocEntry
from docsite.utils.slug import toc_slug

HEADING_LINE = re.compile(r"^(#{2,4})\s(.+)$", re.MULTILINE)


def extract_toc(raw_text: str) -> List[TocEntry]:
    """Collect ``##`` to ``####`` heading lines in document order.

    Works on the raw file text, so front matter is not skipped and inline markup
    inside a heading is kept verbatim in ``text``.
    """
    entries: List[TocEntry] = []
    for match in HEADING_LINE.finditer(raw_text):
        text = match.group(2).strip()
        entries.append(TocEntry(level=len(match.group(1)), text=text, href=f"#{toc_slug(text)}"))
    return entries
