# tests/conftest.py
from __future__ import annotations

from typing import Any, Dict, List

import pytest

from mock_http_client import MockHttpClient

from application.services.execution_deps import ExecutionDeps
from domain.defaults import QueryDefaults
from infrastructure.drivers.static_driver import StaticPageDriver

HOST = "http://fixtures.test"


class MockLogger:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def debug(self, event: str, **fields: Any) -> None:
        self.calls.append({"event": event, "level": "debug", **fields})

    def info(self, event: str, **fields: Any) -> None:
        self.calls.append({"event": event, "level": "info", **fields})

    def warning(self, event: str, **fields: Any) -> None:
        self.calls.append({"event": event, "level": "warning", **fields})

    def error(self, event: str, **fields: Any) -> None:
        self.calls.append({"event": event, "level": "error", **fields})

    def bind(self, **fields: Any) -> "MockLogger":
        return self

    def events(self) -> List[str]:
        return [c["event"] for c in self.calls]


@pytest.fixture
def host() -> str:
    return HOST


@pytest.fixture
def logger() -> MockLogger:
    return MockLogger()


@pytest.fixture
def defaults() -> QueryDefaults:
    return QueryDefaults(wait_timeout_ms=500, poll_interval_ms=5)


@pytest.fixture
def deps(logger, defaults) -> ExecutionDeps:
    return ExecutionDeps(logger=logger, defaults=defaults)


@pytest.fixture
def http_client() -> MockHttpClient:
    return MockHttpClient()


@pytest.fixture
def page(http_client, defaults) -> StaticPageDriver:
    return StaticPageDriver(http_client=http_client, defaults=defaults)
