# domain/steps/base.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Step:
    """A single recorded query instruction. Immutable once appended."""

    @property
    def kind(self) -> str:
        return type(self).__name__
