# application/handlers/wait_handler.py
from __future__ import annotations

import math
import time

from application.handlers.base import StepHandler
from application.services.execution_deps import ExecutionDeps
from domain.exceptions import SelectorTimeoutError
from domain.run import ExecutionState
from domain.steps.wait import WaitForStep


class WaitForStepHandler(StepHandler):
    def supports(self, step) -> bool:
        return isinstance(step, WaitForStep)

    def handle(self, step: WaitForStep, state: ExecutionState, deps: ExecutionDeps) -> ExecutionState:
        timeout_ms = deps.wait_timeout_ms(step.timeout_ms)
        deadline = time.monotonic() + timeout_ms / 1000.0

        # every root of the scope must contain the selector; one shared deadline
        for root in state.scope.roots:
            self._wait_in_root(step, state.page, root, deadline, timeout_ms, deps)

        return state

    def _wait_in_root(self, step: WaitForStep, page, root, deadline: float, timeout_ms: int, deps: ExecutionDeps) -> None:
        poll_sec = max(deps.defaults.poll_interval_ms, 1) / 1000.0

        while True:
            remaining_ms = max(1, math.ceil((deadline - time.monotonic()) * 1000))
            try:
                page.wait_for_selector(step.selector, remaining_ms, root=root)
                return
            except TimeoutError as e:
                remaining = deadline - time.monotonic()
                if remaining > 0:
                    # driver gave up early; keep waiting until the deadline
                    time.sleep(min(poll_sec, remaining))
                    continue
                deps.logger.warning(
                    "wait_for.timeout",
                    selector=step.selector,
                    timeout_ms=timeout_ms,
                )
                raise SelectorTimeoutError(step.selector, timeout_ms) from e
