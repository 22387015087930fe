# infrastructure/query/base_loader.py
"""
Build Query objects from declarative definitions.

Definition shape (YAML shown, JSON is the same structure):

    url: http://example.com/list.html
    method: POST            # optional, GET by default
    post_data: "a=1"        # optional
    steps:
      - wait_for: body
        timeout_ms: 500     # optional
      - group_by: body > div
      - select:
          title: p
          link: {path: a, attr: href}
      - go: http://example.com/other.html

Every step is replayed through the Query builder, so construction errors
(InvalidQuery, InvalidMethod, InvalidPipeline) surface unchanged.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict

from application.query import Query

STEP_KEYS = ("go", "wait_for", "group_by", "select")


class QueryLoadError(Exception):
    pass


class QueryLoaderBase(ABC):
    def load_from_file(self, path: str | Path) -> Query:
        p = Path(path)
        if not p.exists():
            raise QueryLoadError(f"Query file not found: {path}")

        data = self._load_file(p)

        if data is None:
            raise QueryLoadError(f"Query file is empty: {path}")

        if not isinstance(data, dict):
            raise QueryLoadError(f"Query file is invalid: {path}")

        return self.load_from_dict(data)

    def load_from_dict(self, data: Dict[str, Any]) -> Query:
        query = Query(
            url=data.get("url"),
            method=data.get("method", "GET"),
            post_data=data.get("post_data"),
        )

        steps = data.get("steps") or []
        if not isinstance(steps, list):
            raise QueryLoadError("steps must be a list")

        for index, step_data in enumerate(steps):
            query = self._apply_step(query, index, step_data)
        return query

    @abstractmethod
    def _load_file(self, path: Path) -> Any:
        ...

    def _apply_step(self, query: Query, index: int, data: Any) -> Query:
        if not isinstance(data, dict):
            raise QueryLoadError(f"step {index} must be a mapping")

        keys = [k for k in STEP_KEYS if k in data]
        if len(keys) != 1:
            raise QueryLoadError(f"step {index} must have exactly one of {', '.join(STEP_KEYS)}: {sorted(data)}")

        kind = keys[0]
        value = data[kind]

        if kind == "go":
            return query.go(value)
        if kind == "wait_for":
            return query.wait_for(value, timeout_ms=data.get("timeout_ms"))
        if kind == "group_by":
            return query.group_by(value)
        return query.select(value)
