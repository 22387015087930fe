# domain/steps/navigate.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.steps.base import Step

GET = "GET"
POST = "POST"
ALLOWED_METHODS = (GET, POST)


@dataclass(frozen=True)
class NavigateStep(Step):
    url: str
    method: str = GET
    post_data: Optional[str] = None
