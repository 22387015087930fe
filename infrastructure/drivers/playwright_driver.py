# infrastructure/drivers/playwright_driver.py
from __future__ import annotations

from typing import Any, List, Optional

from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from application.ports.page_driver import (
    BLANK_URL,
    PageDriverPort,
    PageRequest,
    PageResponse,
    RequestHandler,
)
from domain.defaults import QueryDefaults

# For URL-like attributes read the resolved DOM property, falling back to the raw attribute.
_RESOLVED_ATTR_JS = (
    "(el, name) => { const raw = el.getAttribute(name); "
    "return raw && typeof el[name] === 'string' && el[name] ? el[name] : raw; }"
)
URL_ATTRIBUTES = ("href", "src", "action")


class PlaywrightPageDriver(PageDriverPort):
    """
    Page driver over a Playwright sync Page.

    The page (and its browser) is owned by the caller; this driver never
    launches or closes anything.
    """

    def __init__(self, page: Page, defaults: Optional[QueryDefaults] = None):
        self._page = page
        self._defaults = defaults or QueryDefaults()
        self._intercept = False
        self._request_handlers: List[RequestHandler] = []
        self._routed = False

    @property
    def page(self) -> Page:
        return self._page

    def navigate(self, url: str, method: str = "GET", post_data: Optional[str] = None) -> PageResponse:
        rewrite = None
        if method.upper() != "GET" or post_data is not None:
            # match the exact URL; a string pattern would be read as a glob
            def matches(request_url: str) -> bool:
                return request_url == url

            def rewrite(route, request):
                # fallback keeps the request flowing through the interception route
                route.fallback(method=method.upper(), post_data=post_data)

            self._page.route(matches, rewrite)

        try:
            response = self._page.goto(url, timeout=self._defaults.navigation_timeout_ms)
        finally:
            if rewrite is not None:
                self._page.unroute(matches, rewrite)

        if response is None:
            # about:blank and same-document navigations have no response
            return PageResponse(status=None, url=self._page.url or BLANK_URL)
        return PageResponse(status=response.status, url=self._page.url)

    def wait_for_selector(self, selector: str, timeout_ms: int, root: Any = None) -> Any:
        target = self._page if root is None else root
        try:
            return target.wait_for_selector(selector, timeout=timeout_ms, state="attached")
        except PlaywrightTimeoutError as e:
            raise TimeoutError(str(e)) from e

    def query_all(self, selector: str, root: Any = None) -> List[Any]:
        target = self._page if root is None else root
        return list(target.query_selector_all(selector))

    def extract_field(self, root: Any, selector: str, attribute: Optional[str] = None) -> Optional[str]:
        target = self._page if root is None else root
        el = target.query_selector(selector)
        if el is None:
            return None

        if attribute is None:
            return (el.text_content() or "").strip()
        if attribute in URL_ATTRIBUTES:
            return el.evaluate(_RESOLVED_ATTR_JS, attribute)
        return el.get_attribute(attribute)

    def evaluate(self, fn: Any, arg: Any = None) -> Any:
        if arg is None:
            return self._page.evaluate(fn)
        return self._page.evaluate(fn, arg)

    def set_request_interception(self, enabled: bool) -> None:
        self._intercept = bool(enabled)
        if enabled and not self._routed:
            self._page.route("**/*", self._on_route)
            self._routed = True
        elif not enabled and self._routed:
            self._page.unroute("**/*", self._on_route)
            self._routed = False

    def on_request(self, handler: RequestHandler) -> None:
        self._request_handlers.append(handler)

    def _on_route(self, route, request) -> None:
        req = PageRequest(
            method=request.method,
            url=request.url,
            post_data=request.post_data,
            headers=dict(request.headers),
        )
        for handler in self._request_handlers:
            resp = handler(req)
            if resp is not None:
                route.fulfill(status=resp.status, content_type=resp.content_type, body=resp.body)
                return
        route.continue_()
