# application/handlers/select_handler.py
from __future__ import annotations

from typing import List

from application.handlers.base import StepHandler
from application.services.execution_deps import ExecutionDeps
from domain.run import ExecutionState, Record
from domain.steps.select import SelectStep


class SelectStepHandler(StepHandler):
    """
    Build one record per root of the current scope.

    A field whose selector matches nothing under the root is None.
    """

    def supports(self, step) -> bool:
        return isinstance(step, SelectStep)

    def handle(self, step: SelectStep, state: ExecutionState, deps: ExecutionDeps) -> ExecutionState:
        page = state.page
        records: List[Record] = []

        for root in state.scope.roots:
            record: Record = {}
            for f in step.fields:
                record[f.name] = page.extract_field(root, f.selector, f.attribute)
            records.append(record)

        missing = [f.name for f in step.fields if all(r[f.name] is None for r in records)]
        deps.logger.debug(
            "select.records",
            scope=state.scope.kind,
            count=len(records),
            fields=[f.name for f in step.fields],
            missing_fields=missing,
        )

        return state.with_records(records)
