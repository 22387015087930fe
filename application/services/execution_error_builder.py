# application/services/execution_error_builder.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Type

from domain.exceptions import (
    BlankPageError,
    HttpStatusError,
    InvalidMethod,
    InvalidPipeline,
    InvalidQuery,
    NoResultsError,
    SelectorTimeoutError,
)

_CODES: Dict[Type[BaseException], str] = {
    InvalidQuery: "invalid_query",
    InvalidMethod: "invalid_method",
    InvalidPipeline: "invalid_pipeline",
    BlankPageError: "blank_page",
    HttpStatusError: "http_status",
    SelectorTimeoutError: "selector_timeout",
    NoResultsError: "no_results",
}


@dataclass(frozen=True)
class ExecutionErrorDetail:
    code: str
    message: str
    status: Optional[int] = None


class ExecutionErrorBuilder:
    def build_from_exception(self, exc: BaseException) -> ExecutionErrorDetail:
        code = "exception"
        for cls, name in _CODES.items():
            if isinstance(exc, cls):
                code = name
                break
        status = getattr(exc, "status", None)
        return ExecutionErrorDetail(
            code=code,
            message=str(exc) or type(exc).__name__,
            status=status if isinstance(status, int) else None,
        )
