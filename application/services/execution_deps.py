# application/services/execution_deps.py
from __future__ import annotations

from dataclasses import dataclass, field, replace

from application.ports.logger import LoggerPort
from domain.defaults import QueryDefaults


@dataclass(frozen=True)
class ExecutionDeps:
    logger: LoggerPort
    defaults: QueryDefaults = field(default_factory=QueryDefaults)

    def with_logger(self, logger: LoggerPort) -> "ExecutionDeps":
        return replace(self, logger=logger)

    def wait_timeout_ms(self, requested) -> int:
        return self.defaults.wait_timeout_ms if requested is None else int(requested)
