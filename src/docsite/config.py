"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONTENT_ROOT = Path("contents/docs")
DEFAULT_OUTPUT_PATH = Path("public/search-index.json")
DEFAULT_ROUTES_PATH = Path("contents/routes.yaml")


def _resolve(path: Path, base_dir: Path | None) -> Path:
    if Path(path).is_absolute() or base_dir is None:
        return Path(path)
    return base_dir / path


@dataclass(slots=True)
class AppConfig:
    content_root: Path = DEFAULT_CONTENT_ROOT
    output_path: Path = DEFAULT_OUTPUT_PATH
    routes_path: Path = DEFAULT_ROUTES_PATH
    extension: str = ".mdx"
    index_name: str = "index.mdx"
    url_prefix: str = "/docs"
    max_concurrency: int = 32

    def __post_init__(self) -> None:
        self.content_root = Path(self.content_root)
        self.output_path = Path(self.output_path)
        self.routes_path = Path(self.routes_path)
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

    def resolve_content_root(self, base_dir: Path | None = None) -> Path:
        return _resolve(self.content_root, base_dir)

    def resolve_output_path(self, base_dir: Path | None = None) -> Path:
        return _resolve(self.output_path, base_dir)

    def resolve_routes_path(self, base_dir: Path | None = None) -> Path:
        return _resolve(self.routes_path, base_dir)
