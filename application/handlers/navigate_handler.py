# application/handlers/navigate_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler
from application.services.execution_deps import ExecutionDeps
from domain.exceptions import BlankPageError, HttpStatusError
from domain.run import ExecutionState, Scope
from domain.steps.navigate import NavigateStep


class NavigateStepHandler(StepHandler):
    """
    Load a URL through the page driver.

    Fails on the blank sentinel page and on any status >= 400.
    Driver/network errors are not caught here.
    """

    def supports(self, step) -> bool:
        return isinstance(step, NavigateStep)

    def handle(self, step: NavigateStep, state: ExecutionState, deps: ExecutionDeps) -> ExecutionState:
        page = state.page
        response = page.navigate(step.url, method=step.method, post_data=step.post_data)

        deps.logger.debug(
            "navigate.response",
            url=step.url,
            method=step.method,
            status=response.status,
            final_url=response.url,
        )

        if response.url == getattr(page, "blank_url", "about:blank"):
            raise BlankPageError(response.url)

        if response.status is not None and response.status >= 400:
            raise HttpStatusError(response.status, response.url)

        return state.with_scope(Scope.document())
