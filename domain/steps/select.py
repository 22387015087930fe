# domain/steps/select.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from domain.fields import FieldDescriptor
from domain.steps.base import Step


@dataclass(frozen=True)
class SelectStep(Step):
    fields: Tuple[FieldDescriptor, ...] = ()
