# application/query.py
"""
Chainable query builder.

    results = (
        Query.get("http://example.com/list.html")
        .wait_for("body")
        .group_by("body > div")
        .select({"title": "p", "link": {"path": "a", "attr": "href"}})
        ._run(page)
    )

Every chain call returns a new Query; the receiver is never modified, so a
built query can be replayed against any number of page drivers.
"""
from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Tuple

from application.executor.query_executor import QueryExecutor
from application.services.execution_deps import ExecutionDeps
from domain.exceptions import InvalidMethod, InvalidPipeline, InvalidQuery
from domain.fields import resolve_fields
from domain.run import Record
from domain.steps import (
    ALLOWED_METHODS,
    GET,
    POST,
    EvalStep,
    GroupByStep,
    NavigateStep,
    SelectStep,
    Step,
    WaitForStep,
)


class Query:
    def __init__(self, url: Optional[str] = None, method: str = GET, post_data: Optional[str] = None):
        _require_url(url)
        if method not in ALLOWED_METHODS:
            raise InvalidMethod(method)

        self._steps: Tuple[Step, ...] = (NavigateStep(url=url, method=method, post_data=post_data),)

    @classmethod
    def get(cls, url: str) -> "Query":
        return cls(url=url, method=GET)

    @classmethod
    def post(cls, url: str, post_data: Optional[str] = None) -> "Query":
        return cls(url=url, method=POST, post_data=post_data)

    @classmethod
    def _from_steps(cls, steps: Tuple[Step, ...]) -> "Query":
        q = cls.__new__(cls)
        q._steps = steps
        return q

    # -------------------------
    # accessors
    # -------------------------

    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    @property
    def url(self) -> str:
        return self._steps[0].url

    @property
    def method(self) -> str:
        return self._steps[0].method

    @property
    def post_data(self) -> Optional[str]:
        return self._steps[0].post_data

    # -------------------------
    # chain
    # -------------------------

    def go(self, url: str) -> "Query":
        _require_url(url)
        return self._append(NavigateStep(url=url))

    def wait_for(self, selector: str, timeout_ms: Optional[int] = None) -> "Query":
        _require_selector(selector)
        if timeout_ms is not None and (
            isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms < 0
        ):
            raise InvalidPipeline(f"wait_for timeout must be a non-negative int, got {timeout_ms!r}")
        return self._append(WaitForStep(selector=selector, timeout_ms=timeout_ms))

    def group_by(self, selector: str) -> "Query":
        _require_selector(selector)
        return self._append(GroupByStep(selector=selector))

    def select(self, fields: Mapping[str, Any]) -> "Query":
        descriptors = resolve_fields(fields)
        if self._scope_has_select():
            raise InvalidPipeline()
        return self._append(SelectStep(fields=descriptors))

    def eval(self, fn: Callable[[Any, List[Record]], Any]) -> "Query":
        if not callable(fn):
            raise InvalidPipeline("eval expects a callable")
        return self._append(EvalStep(fn=fn))

    # -------------------------
    # terminal
    # -------------------------

    def run(
        self,
        page: Any,
        deps: Optional[ExecutionDeps] = None,
        executor: Optional[QueryExecutor] = None,
    ) -> List[Record]:
        if deps is None:
            from infrastructure.logging.loguru_logger import LoguruLogger

            deps = ExecutionDeps(logger=LoguruLogger())
        return (executor or QueryExecutor()).execute(self._steps, page, deps)

    _run = run

    def _append(self, step: Step) -> "Query":
        return Query._from_steps(self._steps + (step,))

    def _scope_has_select(self) -> bool:
        # a scope level starts after the latest navigate / group_by
        for step in reversed(self._steps):
            if isinstance(step, SelectStep):
                return True
            if isinstance(step, (NavigateStep, GroupByStep)):
                return False
        return False

    def __repr__(self) -> str:
        kinds = ", ".join(s.kind for s in self._steps)
        return f"Query({self.method} {self.url!r}: {kinds})"


def _require_url(url: Any) -> None:
    if not isinstance(url, str) or not url.strip():
        raise InvalidQuery()


def _require_selector(selector: Any) -> None:
    if not isinstance(selector, str) or not selector.strip():
        raise InvalidPipeline(f"selector must be a non-empty string, got {selector!r}")
