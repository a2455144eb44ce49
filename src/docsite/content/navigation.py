"""Previous/next navigation over the ordered page routes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Sequence

import yaml

from docsite.errors import ContentParseError
from docsite.models import PrevNext, Route

LOGGER = logging.getLogger(__name__)


class RouteTable:
    """Immutable ordered list of page routes."""

    def __init__(self, routes: Iterable[Route]) -> None:
        self._routes = tuple(routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def previous_next(self, path: str) -> PrevNext:
        """Neighbours of the route whose href is ``/<path>``."""
        href = f"/{path.lstrip('/')}"
        for index, route in enumerate(self._routes):
            if route.href == href:
                prev = self._routes[index - 1] if index > 0 else None
                nxt = self._routes[index + 1] if index + 1 < len(self._routes) else None
                return PrevNext(prev=prev, next=nxt)
        return PrevNext()


def flatten_routes(nodes: Sequence[Mapping[str, Any]], prefix: str = "") -> Iterator[Route]:
    """Flatten nested ``{title, href, noLink, items}`` nodes depth first.

    Child hrefs are appended to their parent's href. ``noLink`` sections are
    left out but their children are kept.
    """
    for node in nodes:
        href = f"{prefix}{node['href']}"
        if not node.get("noLink"):
            yield Route(title=str(node["title"]), href=href)
        yield from flatten_routes(node.get("items") or [], href)


def load_routes(path: Path) -> RouteTable:
    """Build a route table from a YAML file; a missing file gives an empty table."""
    if not path.exists():
        LOGGER.debug("No routes file at %s", path)
        return RouteTable([])

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    except yaml.YAMLError as exc:
        raise ContentParseError(path, "malformed routes file") from exc
    if not isinstance(data, list):
        raise ContentParseError(path, "routes file must contain a list")

    try:
        routes: List[Route] = list(flatten_routes(data))
    except (KeyError, TypeError, AttributeError) as exc:
        raise ContentParseError(path, f"invalid route entry: {exc}") from exc
    return RouteTable(routes)
