# application/handlers/group_handler.py
from __future__ import annotations

from typing import Any, List

from application.handlers.base import StepHandler
from application.services.execution_deps import ExecutionDeps
from domain.run import ExecutionState, Scope
from domain.steps.group import GroupByStep


class GroupByStepHandler(StepHandler):
    """
    Narrow the scope to every element matching the selector.

    Under an existing grouped scope the matches of each group are
    concatenated in group order. Zero matches is a valid (empty) scope.
    """

    def supports(self, step) -> bool:
        return isinstance(step, GroupByStep)

    def handle(self, step: GroupByStep, state: ExecutionState, deps: ExecutionDeps) -> ExecutionState:
        handles: List[Any] = []
        for root in state.scope.roots:
            handles.extend(state.page.query_all(step.selector, root=root))

        deps.logger.debug(
            "group_by.matched",
            selector=step.selector,
            parents=len(state.scope.roots),
            count=len(handles),
        )

        return state.with_scope(Scope.grouped(handles))
