"""
================================================================================
Browser Session
================================================================================

Per-test browser state management for UI automation. pytest-playwright owns
the browser and context lifecycle; this module covers what happens inside a
test's page.

Features:
    - State isolation (cookies, local/session storage, viewport)
    - Explicit policy for uncaught page runtime errors
    - Failure diagnostics hooks (screenshot, URL, page errors, API traffic)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

import allure
from loguru import logger
from playwright.sync_api import Page

from storefront_tools.common.global_config import HarnessSettings


CLEAR_STORAGE_SCRIPT = "() => { window.localStorage.clear(); window.sessionStorage.clear(); }"


class PageRuntimeError(Exception):
    """Raised when the page reported an uncaught error the policy treats as fatal."""
    pass


# =============================================================================
# Page Error Policy
# =============================================================================

@dataclass
class PageErrorPolicy:
    """
    Decides what uncaught page exceptions mean for the test.

    The storefront pages throw from third-party scripts (ads, trackers), so
    the default policy records and logs them without failing anything.

    Attributes:
        fail_on_error: Treat recorded errors as fatal
        ignore_patterns: Regexes for messages that are never fatal
        errors: Messages recorded so far
    """
    fail_on_error: bool = False
    ignore_patterns: Sequence[str] = ()
    errors: List[str] = field(default_factory=list)

    @classmethod
    def strict(cls, ignore_patterns: Sequence[str] = ()) -> "PageErrorPolicy":
        return cls(fail_on_error=True, ignore_patterns=tuple(ignore_patterns))

    def attach(self, page: Page) -> "PageErrorPolicy":
        """Start recording the page's uncaught exceptions."""
        page.on("pageerror", self.record)
        return self

    def record(self, error: Any) -> None:
        message = getattr(error, "message", None) or str(error)
        self.errors.append(message)
        logger.warning(f"Uncaught page error: {message}")

    def is_fatal(self, message: str) -> bool:
        if not self.fail_on_error:
            return False
        return not any(re.search(pattern, message) for pattern in self.ignore_patterns)

    def fatal_errors(self) -> List[str]:
        return [message for message in self.errors if self.is_fatal(message)]

    def raise_if_fatal(self) -> None:
        fatal = self.fatal_errors()
        if fatal:
            raise PageRuntimeError(
                f"{len(fatal)} uncaught page error(s): " + "; ".join(fatal)
            )


# =============================================================================
# Failure Diagnostics
# =============================================================================

DiagnosticHook = Callable[[str], None]


class FailureDiagnostics:
    """
    Registry of capture hooks fired when a test fails.

    Hooks are best-effort: a hook that raises is logged and skipped so the
    original failure is what the report shows.
    """

    def __init__(self) -> None:
        self._hooks: List[DiagnosticHook] = []

    def register(self, hook: DiagnosticHook) -> DiagnosticHook:
        self._hooks.append(hook)
        return hook

    def __len__(self) -> int:
        return len(self._hooks)

    def fire(self, test_name: str) -> None:
        with allure.step("Capture failure details"):
            for hook in self._hooks:
                try:
                    hook(test_name)
                except Exception as e:
                    logger.warning(
                        f"Failure diagnostic {getattr(hook, '__name__', hook)} failed: {e}"
                    )


# =============================================================================
# Browser Session
# =============================================================================

class BrowserSession:
    """
    State isolation and diagnostics for one test's page.

    Usage:
        session = BrowserSession(page, settings)
        session.reset_state()
        ...
        session.capture_failure("test_checkout")
    """

    def __init__(
        self,
        page: Page,
        settings: Optional[HarnessSettings] = None,
        error_policy: Optional[PageErrorPolicy] = None,
        http: Optional[Any] = None,
    ):
        """
        Args:
            page: Playwright Page object
            settings: Harness settings (viewport)
            error_policy: Page runtime error policy; default ignores errors
            http: Optional HttpClient whose recent calls are reported on failure
        """
        self.page = page
        self.settings = settings or HarnessSettings()
        self.error_policy = (error_policy or PageErrorPolicy()).attach(page)
        self.http = http
        self.diagnostics = FailureDiagnostics()
        self._register_default_hooks()

    def reset_state(self) -> None:
        """Clear cookies and web storage, then apply the configured viewport."""
        with allure.step("Reset browser state"):
            self.page.context.clear_cookies()
            # Storage is inaccessible on about:blank and other opaque origins
            if self.page.url.startswith("http"):
                self.page.evaluate(CLEAR_STORAGE_SCRIPT)
            self.page.set_viewport_size(dict(self.settings.viewport))
            logger.debug(f"Browser state reset (viewport {self.settings.viewport})")

    def capture_failure(self, test_name: str) -> None:
        self.diagnostics.fire(test_name)

    def _register_default_hooks(self) -> None:
        page = self.page

        def screenshot(test_name: str) -> None:
            allure.attach(
                page.screenshot(full_page=True),
                name=f"failure_{test_name}",
                attachment_type=allure.attachment_type.PNG,
            )

        def current_url(test_name: str) -> None:
            allure.attach(
                page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )

        def page_errors(test_name: str) -> None:
            if self.error_policy.errors:
                allure.attach(
                    "\n".join(self.error_policy.errors),
                    name="Page Errors",
                    attachment_type=allure.attachment_type.TEXT,
                )

        def recent_api_calls(test_name: str) -> None:
            if self.http is not None and self.http.recent_calls():
                allure.attach(
                    json.dumps(self.http.recent_calls()[-10:], indent=2),
                    name="Recent API Requests",
                    attachment_type=allure.attachment_type.JSON,
                )

        for hook in (screenshot, current_url, page_errors, recent_api_calls):
            self.diagnostics.register(hook)


__all__ = [
    "BrowserSession",
    "FailureDiagnostics",
    "PageErrorPolicy",
    "PageRuntimeError",
]
