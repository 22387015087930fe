from domain.steps.base import Step
from domain.steps.navigate import NavigateStep, ALLOWED_METHODS, GET, POST
from domain.steps.wait import WaitForStep
from domain.steps.group import GroupByStep
from domain.steps.select import SelectStep
from domain.steps.eval import EvalStep

__all__ = [
    "Step",
    "NavigateStep",
    "ALLOWED_METHODS",
    "GET",
    "POST",
    "WaitForStep",
    "GroupByStep",
    "SelectStep",
    "EvalStep",
]
