# domain/steps/eval.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from domain.steps.base import Step


@dataclass(frozen=True)
class EvalStep(Step):
    """
    Caller-authored callback run between extraction steps.

    fn(page, results) -> (page, results)
    """
    fn: Callable[[Any, list], Any] = field(compare=False)
