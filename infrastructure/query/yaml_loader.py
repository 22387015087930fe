# infrastructure/query/yaml_loader.py
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from infrastructure.query.base_loader import QueryLoadError, QueryLoaderBase


class YamlQueryLoader(QueryLoaderBase):
    def _load_file(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as f:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise QueryLoadError(f"Query file is not valid YAML: {path}: {e}") from e
