# application/executor/query_executor.py
from __future__ import annotations

import time
import uuid
from typing import Any, List, Optional, Sequence

from application.executor.handler_registry import HandlerRegistry
from application.services.execution_deps import ExecutionDeps
from domain.exceptions import NoResultsError
from domain.run import ExecutionState, Record
from domain.steps.base import Step


class QueryExecutor:
    """
    Replays recorded steps against a page driver.

    Steps run strictly in order; the first failing step aborts the run and its
    exception propagates unchanged. No partial results are returned.
    """

    def __init__(self, registry: Optional[HandlerRegistry] = None):
        self._registry = registry or HandlerRegistry()

    def execute(self, steps: Sequence[Step], page: Any, deps: ExecutionDeps, run_id: str = "") -> List[Record]:
        run_id = run_id or uuid.uuid4().hex
        deps = deps.with_logger(deps.logger.bind(run_id=run_id))

        deps.logger.info("query.start", steps=len(steps))
        t_run = time.perf_counter()

        state = ExecutionState(page=page)
        for index, step in enumerate(steps):
            state = self._execute_step(index, step, state, deps)

        if state.selects_run == 0:
            deps.logger.error("query.no_select", steps=len(steps))
            raise NoResultsError()

        deps.logger.info(
            "query.end",
            records=len(state.results),
            elapsed_ms=int((time.perf_counter() - t_run) * 1000),
        )
        return [dict(r) for r in state.results]

    def _execute_step(self, index: int, step: Step, state: ExecutionState, deps: ExecutionDeps) -> ExecutionState:
        handler = self._registry.get_handler(step)

        deps.logger.info("step.start", step_index=index, step_type=step.kind)
        t0 = time.perf_counter()

        try:
            new_state = handler.handle(step, state, deps)
        except Exception as e:
            deps.logger.error(
                "step.failed",
                step_index=index,
                step_type=step.kind,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        if new_state is None:
            raise RuntimeError(
                f"Handler returned None: handler={type(handler).__name__}, step={index} ({step.kind})"
            )

        deps.logger.info(
            "step.end",
            step_index=index,
            step_type=step.kind,
            scope=new_state.scope.kind,
            roots=len(new_state.scope.roots),
            elapsed_ms=int((time.perf_counter() - t0) * 1000),
        )
        return new_state
