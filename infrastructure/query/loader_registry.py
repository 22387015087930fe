# infrastructure/query/loader_registry.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

from infrastructure.query.base_loader import QueryLoaderBase, QueryLoadError
from infrastructure.query.json_loader import JsonQueryLoader
from infrastructure.query.yaml_loader import YamlQueryLoader


class QueryLoaderRegistry:
    def __init__(self) -> None:
        self._loaders: Dict[str, QueryLoaderBase] = {
            ".yaml": YamlQueryLoader(),
            ".yml": YamlQueryLoader(),
            ".json": JsonQueryLoader(),
        }

    def get_loader(self, path: Path) -> QueryLoaderBase:
        ext = path.suffix.lower()
        loader = self._loaders.get(ext)
        if loader is None:
            raise QueryLoadError(f"Unsupported query format: {ext}")
        return loader
