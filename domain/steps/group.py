# domain/steps/group.py
from __future__ import annotations

from dataclasses import dataclass

from domain.steps.base import Step


@dataclass(frozen=True)
class GroupByStep(Step):
    selector: str
