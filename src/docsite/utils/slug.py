"""Slug generation shared by the table of contents and the search index.

Two rule sets exist. Table of contents anchors collapse whitespace and drop
everything outside ``[a-z0-9-]``; search index heading ids collapse every run of
non-word characters into a dash and trim dashes at both ends. Both agree on
text made of letters, digits and spaces, which is what keeps anchor links from
the search results pointing at the TOC anchors. Punctuation is where they
diverge: ``"What's new?"`` becomes ``whats-new`` and ``what-s-new`` respectively.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SlugRules:
    separator: re.Pattern[str]
    strip: re.Pattern[str] | None = None
    trim_dashes: bool = False


TOC_RULES = SlugRules(separator=re.compile(r"\s+"), strip=re.compile(r"[^a-z0-9-]"))
HEADING_RULES = SlugRules(separator=re.compile(r"[^\w]+", re.ASCII), trim_dashes=True)


def slugify(text: str, rules: SlugRules) -> str:
    """Lowercase ``text`` and normalize it according to ``rules``."""
    slug = rules.separator.sub("-", text.lower())
    if rules.strip is not None:
        slug = rules.strip.sub("", slug)
    if rules.trim_dashes:
        slug = slug.strip("-")
    return slug


def toc_slug(text: str) -> str:
    return slugify(text, TOC_RULES)


def heading_slug(text: str) -> str:
    return slugify(text, HEADING_RULES)
