# infrastructure/query/json_loader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from infrastructure.query.base_loader import QueryLoadError, QueryLoaderBase


class JsonQueryLoader(QueryLoaderBase):
    def _load_file(self, path: Path) -> Any:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise QueryLoadError(f"Query file is not valid JSON: {path}: {e}") from e
