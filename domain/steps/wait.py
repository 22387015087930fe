# domain/steps/wait.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.steps.base import Step


@dataclass(frozen=True)
class WaitForStep(Step):
    selector: str
    timeout_ms: Optional[int] = None  # None => QueryDefaults.wait_timeout_ms
