"""Map a content slug to a file under the content root."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

LOGGER = logging.getLogger(__name__)

CandidateFactory = Callable[[Path, str], Optional[Path]]


@dataclass(frozen=True, slots=True)
class ResolutionStrategy:
    """One step of the fallback chain.

    ``candidate`` returns a path for the slug or ``None`` when the strategy does
    not apply. When ``probe`` is true the candidate is only accepted if it exists.
    """

    name: str
    candidate: CandidateFactory
    probe: bool = True


def _exists(path: Path) -> bool:
    try:
        path.stat()
    except OSError:
        return False
    return True


def default_strategies(extension: str = ".mdx", index_name: str = "index.mdx") -> list[ResolutionStrategy]:
    """Explicit extension, then sibling file with extension, then directory index."""
    return [
        ResolutionStrategy(
            "explicit_extension",
            lambda root, slug: root / slug if slug.endswith(extension) else None,
            probe=False,
        ),
        ResolutionStrategy("sibling_file", lambda root, slug: root / f"{slug}{extension}"),
        ResolutionStrategy("directory_index", lambda root, slug: root / slug / index_name, probe=False),
    ]


class PathResolver:
    """Resolve slugs by walking an ordered list of strategies."""

    def __init__(
        self,
        content_root: Path,
        strategies: Sequence[ResolutionStrategy] | None = None,
        *,
        extension: str = ".mdx",
        index_name: str = "index.mdx",
    ) -> None:
        self.content_root = Path(content_root)
        if strategies is None:
            strategies = default_strategies(extension, index_name)
        self.strategies = tuple(strategies)
        if not self.strategies or self.strategies[-1].probe:
            raise ValueError("The last resolution strategy must not require an existing file")

    def resolve(self, slug: str) -> Path:
        """Return the first matching candidate; the final one is returned unchecked."""
        slug = slug.lstrip("/")
        for strategy in self.strategies:
            candidate = strategy.candidate(self.content_root, slug)
            if candidate is None:
                continue
            if not strategy.probe or _exists(candidate):
                LOGGER.debug("Resolved %r via %s: %s", slug, strategy.name, candidate)
                return candidate
        raise LookupError(f"No resolution strategy produced a path for {slug!r}")
