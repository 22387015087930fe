# application/handlers/eval_handler.py
from __future__ import annotations

from dataclasses import replace

from application.handlers.base import StepHandler
from application.services.execution_deps import ExecutionDeps
from domain.exceptions import InvalidPipeline
from domain.run import ExecutionState, Scope
from domain.steps.eval import EvalStep


class EvalStepHandler(StepHandler):
    def supports(self, step) -> bool:
        return isinstance(step, EvalStep)

    def handle(self, step: EvalStep, state: ExecutionState, deps: ExecutionDeps) -> ExecutionState:
        returned = step.fn(state.page, list(state.results))

        if not isinstance(returned, tuple) or len(returned) != 2:
            raise InvalidPipeline("eval callback must return a (page, results) pair")

        page, results = returned
        if results is None:
            raise InvalidPipeline("eval callback must return a (page, results) pair")

        scope = state.scope if page is state.page else Scope.document()
        deps.logger.debug("eval.done", results=len(results), page_replaced=page is not state.page)

        return replace(state, page=page, scope=scope, results=tuple(results))
