# application/ports/page_driver.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

BLANK_URL = "about:blank"


@dataclass(frozen=True)
class PageResponse:
    status: Optional[int]  # None when nothing was fetched (blank page)
    url: str


@dataclass(frozen=True)
class PageRequest:
    method: str
    url: str
    post_data: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class InterceptedResponse:
    status: int = 200
    body: str = ""
    content_type: str = "text/html"


RequestHandler = Callable[[PageRequest], Optional[InterceptedResponse]]


class PageDriverPort(ABC):
    """
    Capability surface the executor is written against.

    Element handles are opaque; root=None always means the whole document.
    """

    blank_url: str = BLANK_URL

    @abstractmethod
    def navigate(self, url: str, method: str = "GET", post_data: Optional[str] = None) -> PageResponse:
        ...

    @abstractmethod
    def wait_for_selector(self, selector: str, timeout_ms: int, root: Any = None) -> Any:
        """Return the first matching handle, or raise the builtin TimeoutError."""
        ...

    @abstractmethod
    def query_all(self, selector: str, root: Any = None) -> List[Any]:
        ...

    @abstractmethod
    def extract_field(self, root: Any, selector: str, attribute: Optional[str] = None) -> Optional[str]:
        ...

    @abstractmethod
    def evaluate(self, fn: Any, arg: Any = None) -> Any:
        ...

    # Only used to synthesize responses in fixtures.
    def set_request_interception(self, enabled: bool) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not support request interception")

    def on_request(self, handler: RequestHandler) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not support request interception")
