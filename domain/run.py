# domain/run.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

DOCUMENT = "document"
GROUPED = "grouped"

Record = Dict[str, Optional[str]]


@dataclass(frozen=True)
class Scope:
    kind: str
    roots: Tuple[Any, ...]

    @classmethod
    def document(cls) -> "Scope":
        # None stands for the whole page
        return cls(kind=DOCUMENT, roots=(None,))

    @classmethod
    def grouped(cls, handles) -> "Scope":
        return cls(kind=GROUPED, roots=tuple(handles))

    @property
    def is_document(self) -> bool:
        return self.kind == DOCUMENT


@dataclass(frozen=True)
class ExecutionState:
    page: Any
    scope: Scope = field(default_factory=Scope.document)
    results: Tuple[Record, ...] = ()
    selects_run: int = 0

    def with_scope(self, scope: Scope) -> "ExecutionState":
        return replace(self, scope=scope)

    def with_records(self, records) -> "ExecutionState":
        return replace(
            self,
            results=self.results + tuple(records),
            selects_run=self.selects_run + 1,
        )
