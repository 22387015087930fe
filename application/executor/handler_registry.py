# application/executor/handler_registry.py
from __future__ import annotations

from typing import List, Optional

from application.handlers.base import StepHandler
from application.handlers.eval_handler import EvalStepHandler
from application.handlers.group_handler import GroupByStepHandler
from application.handlers.navigate_handler import NavigateStepHandler
from application.handlers.select_handler import SelectStepHandler
from application.handlers.wait_handler import WaitForStepHandler
from domain.steps.base import Step


class HandlerRegistry:
    def __init__(self, handlers: Optional[List[StepHandler]] = None):
        self._handlers = handlers if handlers is not None else default_handlers()

    def get_handler(self, step: Step) -> StepHandler:
        for h in self._handlers:
            if h.supports(step):
                return h
        raise RuntimeError(f"No handler found for step: {step.kind}")


def default_handlers() -> List[StepHandler]:
    return [
        NavigateStepHandler(),
        WaitForStepHandler(),
        GroupByStepHandler(),
        SelectStepHandler(),
        EvalStepHandler(),
    ]
