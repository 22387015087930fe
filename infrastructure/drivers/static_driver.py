# infrastructure/drivers/static_driver.py
from __future__ import annotations

import time
from typing import Any, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from application.ports.http_client import HttpClientPort
from application.ports.logger import LoggerPort
from application.ports.page_driver import (
    BLANK_URL,
    InterceptedResponse,
    PageDriverPort,
    PageRequest,
    PageResponse,
    RequestHandler,
)
from application.ports.requests_client import RequestsSessionHttpClient
from domain.defaults import QueryDefaults

# attributes whose value is resolved against the page URL
URL_ATTRIBUTES = ("href", "src", "action")


class StaticPageDriver(PageDriverPort):
    """
    Page driver over fetched HTML, without a browser.

    Pages are fetched through an HttpClientPort and parsed with BeautifulSoup
    (lxml). Element handles are bs4 Tags. No JavaScript runs, so evaluate()
    takes a Python callable that receives the parsed document and may mutate
    it in place.
    """

    def __init__(
        self,
        http_client: Optional[HttpClientPort] = None,
        defaults: Optional[QueryDefaults] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self._defaults = defaults or QueryDefaults()
        self._http = http_client or RequestsSessionHttpClient(
            base_headers={"User-Agent": self._defaults.user_agent, **self._defaults.headers},
            timeout_sec=self._defaults.navigation_timeout_ms / 1000.0,
        )
        self._logger = logger
        self._intercept = False
        self._request_handlers: List[RequestHandler] = []

        self.url: str = BLANK_URL
        self.document: BeautifulSoup = _parse("")

    # -------------------------
    # PageDriverPort
    # -------------------------

    def navigate(self, url: str, method: str = "GET", post_data: Optional[str] = None) -> PageResponse:
        if url == BLANK_URL:
            self.url = BLANK_URL
            self.document = _parse("")
            return PageResponse(status=None, url=BLANK_URL)

        request = PageRequest(method=method.upper(), url=url, post_data=post_data)

        intercepted = self._dispatch_request(request)
        if intercepted is not None:
            status, final_url, text = intercepted.status, url, intercepted.body
        else:
            resp = self._http.request(request.method, url, data=post_data)
            status, final_url, text = resp.status, resp.url, resp.text

        self.url = final_url
        self.document = _parse(text)

        if self._logger:
            self._logger.debug("static_driver.navigate", url=url, method=request.method, status=status)

        return PageResponse(status=status, url=final_url)

    def wait_for_selector(self, selector: str, timeout_ms: int, root: Any = None) -> Any:
        deadline = time.monotonic() + timeout_ms / 1000.0
        interval = max(self._defaults.poll_interval_ms, 1) / 1000.0

        while True:
            node = self._root(root).select_one(selector)
            if node is not None:
                return node
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TimeoutError(f"waiting for selector `{selector}` failed: timeout {timeout_ms}ms exceeded")
            time.sleep(min(interval, remaining))

    def query_all(self, selector: str, root: Any = None) -> List[Any]:
        return list(self._root(root).select(selector))

    def extract_field(self, root: Any, selector: str, attribute: Optional[str] = None) -> Optional[str]:
        node = self._root(root).select_one(selector)
        if node is None:
            return None

        if attribute is None:
            return node.get_text().strip()

        value = node.get(attribute)
        if value is None:
            return None
        if isinstance(value, list):
            # multi-valued attributes such as class
            value = " ".join(value)
        if attribute in URL_ATTRIBUTES and value and self.url != BLANK_URL:
            return urljoin(self.url, value)
        return str(value)

    def evaluate(self, fn: Any, arg: Any = None) -> Any:
        if not callable(fn):
            raise TypeError("StaticPageDriver.evaluate expects a callable taking the parsed document")
        if arg is None:
            return fn(self.document)
        return fn(self.document, arg)

    def set_request_interception(self, enabled: bool) -> None:
        self._intercept = bool(enabled)

    def on_request(self, handler: RequestHandler) -> None:
        self._request_handlers.append(handler)

    # -------------------------
    # helpers
    # -------------------------

    def _root(self, root: Any) -> Tag:
        return self.document if root is None else root

    def _dispatch_request(self, request: PageRequest) -> Optional[InterceptedResponse]:
        if not self._intercept:
            return None
        for handler in self._request_handlers:
            resp = handler(request)
            if resp is not None:
                return resp
        return None


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")
