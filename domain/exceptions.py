# domain/exceptions.py
from __future__ import annotations

from typing import Optional


class QueryError(Exception):
    """Base class for every error raised by query construction or replay."""


class InvalidQuery(QueryError):
    def __init__(self, message: str = "invalid query"):
        super().__init__(message)


class InvalidMethod(QueryError):
    def __init__(self, method: object):
        super().__init__(f"invalid method {method}")
        self.method = method


class InvalidPipeline(QueryError):
    def __init__(self, message: str = "Select can only take a path collection"):
        super().__init__(message)


class BlankPageError(QueryError):
    def __init__(self, url: str):
        super().__init__("blank page")
        self.url = url


class HttpStatusError(QueryError):
    def __init__(self, status: int, url: Optional[str] = None):
        super().__init__(f"response return status code: {status}")
        self.status = status
        self.url = url


class SelectorTimeoutError(QueryError, TimeoutError):
    """
    A wait_for step did not see its selector before the deadline.

    Also a builtin TimeoutError so callers can catch either.
    """

    def __init__(self, selector: str, timeout_ms: int):
        super().__init__(f"waiting for selector `{selector}` failed: timeout {timeout_ms}ms exceeded")
        self.selector = selector
        self.timeout_ms = timeout_ms


class NoResultsError(QueryError):
    def __init__(self) -> None:
        super().__init__("query did not return any results. Did you forget a select?")
