"""MDX loading and text extraction utilities.

Uses python-frontmatter for the YAML header and Python-Markdown for the body.
Python-Markdown builds an ElementTree before serializing; the plain text
rendering swaps its HTML serializer for one that only emits text, and heading
extraction reads the tree directly.
"""

from __future__ import annotations

import html
import logging
import re
import xml.etree.ElementTree as etree
from pathlib import Path
from typing import Any, Dict, List, Tuple

import frontmatter
import markdown
import yaml
from markdown.postprocessors import Postprocessor
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE

from docsite.errors import ContentIOError, ContentNotFoundError, ContentParseError
from docsite.models import Heading, SearchDocument
from docsite.utils.files import relative_dir
from docsite.utils.slug import heading_slug
from docsite.utils.text import collapse_newlines

LOGGER = logging.getLogger(__name__)

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_BLOCK_TAGS = HEADING_TAGS | {
    "p", "pre", "blockquote", "ul", "ol", "li", "dl", "dt", "dd",
    "table", "thead", "tbody", "tr", "th", "td", "hr", "br", "div",
}


def read_content(path: Path) -> str:
    """Read a content file, mapping filesystem errors to docsite errors."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ContentNotFoundError(path) from exc
    except UnicodeDecodeError as exc:
        raise ContentParseError(path, "not valid UTF-8") from exc
    except OSError as exc:
        raise ContentIOError(path) from exc


def split_frontmatter(raw_text: str, path: Path) -> Tuple[Dict[str, Any], str]:
    """Return ``(metadata, body)`` for a document with an optional YAML header."""
    try:
        post = frontmatter.loads(raw_text)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        raise ContentParseError(path, "malformed front matter") from exc
    return dict(post.metadata), post.content


MARKDOWN_EXTENSIONS = ["fenced_code"]

_CODE_BLOCK = re.compile(r"^<pre[^>]*><code[^>]*>(.*)</code></pre>$", re.DOTALL)
_ENTITY = re.compile(r"^&(?:#[0-9]+|#x[0-9a-fA-F]+|[a-zA-Z0-9]+);$")


def _new_markdown() -> markdown.Markdown:
    return markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)


def _stashed_text(raw: object) -> str | None:
    """Decoded text of a stashed fenced code block or entity, ``None`` for other raw HTML."""
    if not isinstance(raw, str):
        return None
    match = _CODE_BLOCK.match(raw)
    if match:
        return html.unescape(match.group(1))
    if _ENTITY.match(raw):
        return html.unescape(raw)
    return None


def _write_text(element: etree.Element, parts: List[str]) -> None:
    if element.text:
        # code spans and indented code keep Python-Markdown's escaping in the tree
        parts.append(html.unescape(element.text) if element.tag == "code" else element.text)
    for child in element:
        _write_text(child, parts)
    if element.tag in _BLOCK_TAGS:
        parts.append("\n")
    if element.tail:
        parts.append(element.tail)


def _to_plain_text(element: etree.Element) -> str:
    parts: List[str] = []
    _write_text(element, parts)
    return "".join(parts)


class _StashAsText(Postprocessor):
    """Turn stashed code blocks and entities into text before raw HTML is restored."""

    def run(self, text: str) -> str:
        blocks = self.md.htmlStash.rawHtmlBlocks
        for index, raw in enumerate(blocks):
            decoded = _stashed_text(raw)
            if decoded is not None:
                blocks[index] = decoded
        return text


class _TreeCapture(Treeprocessor):
    """Keep a reference to the fully processed tree, with entities decoded."""

    root: etree.Element | None = None

    def run(self, root: etree.Element) -> None:
        for element in root.iter():
            element.text = self._decode_entities(element.text)
            element.tail = self._decode_entities(element.tail)
        self.root = root

    def _decode_entities(self, text: str | None) -> str | None:
        if not text:
            return text

        def replace(match: re.Match[str]) -> str:
            raw = self.md.htmlStash.rawHtmlBlocks[int(match.group(1))]
            if isinstance(raw, str) and _ENTITY.match(raw):
                return html.unescape(raw)
            return match.group(0)

        return HTML_PLACEHOLDER_RE.sub(replace, text)


def render_plain_text(body: str) -> str:
    """Render markdown to text with syntax markers removed, newlines collapsed."""
    md = _new_markdown()
    md.serializer = _to_plain_text
    md.stripTopLevelTags = False
    # ahead of raw_html (30), which substitutes the stash into the output
    md.postprocessors.register(_StashAsText(md), "docsite_stash_text", 35)
    return collapse_newlines(md.convert(body))


def parse_tree(body: str) -> etree.Element:
    """Parse markdown into its processed element tree."""
    md = _new_markdown()
    capture = _TreeCapture(md)
    # after inline patterns and unescaping have run
    md.treeprocessors.register(capture, "docsite_capture", -1)
    md.convert(body)
    if capture.root is None:
        # blank documents short-circuit before any tree is built
        return etree.Element(md.doc_tag)
    return capture.root


def _direct_text(element: etree.Element) -> str:
    """Text of ``element`` itself, skipping anything nested in child elements."""
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return HTML_PLACEHOLDER_RE.sub("", "".join(parts))


def extract_headings(body: str) -> List[Heading]:
    """Headings in document order with ids from :func:`heading_slug`."""
    headings: List[Heading] = []
    for element in parse_tree(body).iter():
        if element.tag not in HEADING_TAGS:
            continue
        text = _direct_text(element)
        slug = heading_slug(text)
        if text and slug:
            headings.append(Heading(text=text, id=slug))
    return headings


def build_search_document(
    path: Path,
    raw_text: str,
    *,
    content_root: Path,
    url_prefix: str = "/docs",
) -> SearchDocument:
    """Produce the search index record for an index document."""
    metadata, body = split_frontmatter(raw_text, path)
    relative = relative_dir(path, content_root)
    folder_name = relative.rsplit("/", 1)[-1]
    document = SearchDocument(
        id=relative,
        title=str(metadata.get("title") or relative),
        folder_name=folder_name,
        content=render_plain_text(body),
        url=f"{url_prefix.rstrip('/')}/{relative}",
        headings=extract_headings(body),
    )
    LOGGER.debug("Extracted %d headings from %s", len(document.headings), path)
    return document
