"""JSON persistence for the search index."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from docsite.errors import ContentNotFoundError, ContentParseError
from docsite.models import SearchDocument

LOGGER = logging.getLogger(__name__)


class IndexWriter:
    """Writes the whole search index to a single JSON file."""

    def __init__(self, output_path: Path, *, indent: int = 2) -> None:
        self.output_path = Path(output_path)
        self.indent = indent

    def serialize(self, documents: Sequence[SearchDocument]) -> str:
        payload = [document.to_dict() for document in documents]
        return json.dumps(payload, indent=self.indent, ensure_ascii=False)

    def write(self, documents: Sequence[SearchDocument]) -> Path:
        """Replace any existing artifact with ``documents``.

        The JSON is written to a sibling staging file and renamed over the
        artifact, so a failed write leaves the previous index in place.
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.output_path.with_name(f".{self.output_path.name}.tmp")
        try:
            staging.write_text(self.serialize(documents), encoding="utf-8")
            staging.replace(self.output_path)
        except OSError:
            staging.unlink(missing_ok=True)
            raise
        LOGGER.info("Wrote %d documents to %s", len(documents), self.output_path)
        return self.output_path

    def read(self) -> List[Dict[str, Any]]:
        try:
            text = self.output_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ContentNotFoundError(self.output_path) from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ContentParseError(self.output_path, "search index is not valid JSON") from exc
