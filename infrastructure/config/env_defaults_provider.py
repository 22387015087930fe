# infrastructure/config/env_defaults_provider.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from domain.defaults import QueryDefaults

PREFIX = "PAGEQUERY_"

_env_path = Path(__file__).parent.parent.parent / ".env"


class EnvDefaultsProvider:
    """
    Build QueryDefaults from PAGEQUERY_* variables.

    Values in the project .env take precedence over the process environment.
    """

    def __init__(self, env_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None):
        path = env_path or _env_path
        values: Dict[str, Optional[str]] = dict(dotenv_values(path)) if path.exists() else {}

        for key, value in (os.environ if environ is None else environ).items():
            if key not in values:
                values[key] = value

        self._values = {k: v for k, v in values.items() if k.startswith(PREFIX) and v is not None}

    def get(self) -> QueryDefaults:
        base = QueryDefaults()
        return QueryDefaults(
            wait_timeout_ms=self._int("WAIT_TIMEOUT_MS", base.wait_timeout_ms),
            navigation_timeout_ms=self._int("NAVIGATION_TIMEOUT_MS", base.navigation_timeout_ms),
            poll_interval_ms=self._int("POLL_INTERVAL_MS", base.poll_interval_ms),
            user_agent=self._values.get(PREFIX + "USER_AGENT", base.user_agent),
        )

    def log_level(self) -> str:
        return self._values.get(PREFIX + "LOG_LEVEL", "INFO").upper()

    def _int(self, name: str, default: int) -> int:
        raw = self._values.get(PREFIX + name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{PREFIX}{name} must be an integer, got {raw!r}") from None
