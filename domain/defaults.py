# domain/defaults.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"


@dataclass(frozen=True)
class QueryDefaults:
    wait_timeout_ms: int = 30000
    navigation_timeout_ms: int = 30000
    poll_interval_ms: int = 50
    user_agent: str = DEFAULT_USER_AGENT
    headers: Dict[str, str] = field(default_factory=dict)
