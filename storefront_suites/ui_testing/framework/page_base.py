"""
================================================================================
Base Page Object
================================================================================

Foundation class for the storefront Page Object Model.

Provides:
    - Navigation to the page's route and a load gate
    - LiveQuery element accessors (resolved fresh on every use)
    - Polling interactions/assertions through a shared ElementActions
    - Title, URL, scroll and screenshot helpers

Pages share this one shallow base; anything that waits or acts goes through
`self.actions`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol, Tuple, Type, TypeVar, Union, runtime_checkable

import allure
from loguru import logger
from playwright.sync_api import Page

from storefront_tools.common.global_config import HarnessSettings

from .element_actions import ElementActions
from .locators import LiveQuery


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"

P = TypeVar("P", bound="PageBase")


@runtime_checkable
class Navigable(Protocol):
    """A screen reachable by its own route."""

    URL_PATH: str

    def visit(self) -> "Navigable":
        ...


@runtime_checkable
class Awaitable(Protocol):
    """A screen with a load gate that can be waited on."""

    def wait_for_page_load(self) -> "Awaitable":
        ...


class PageBase:
    """
    Base class for all storefront page objects.

    Usage:
        class LoginPage(PageBase):
            URL_PATH = "/login"

            @property
            def email_input(self) -> LiveQuery:
                return self.element('[data-qa="login-email"]', "Login email")

            def login(self, email: str, password: str) -> "LoginPage":
                self.actions.fill(self.email_input, email)
                ...
                return self
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""
    # Element that must be visible before the page counts as loaded
    LOAD_GATE: str = "body"

    def __init__(
        self,
        page: Page,
        settings: Optional[HarnessSettings] = None,
        actions: Optional[ElementActions] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            settings: Harness settings (base URL and timeouts)
            actions: Shared ElementActions; built from the settings if omitted
        """
        self.page = page
        self.settings = settings or HarnessSettings()
        self.base_url = self.settings.base_url.rstrip("/")
        self.actions = actions or ElementActions(
            page, default_timeout=self.settings.default_command_timeout
        )

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def element(self, selector: str, description: str = "") -> LiveQuery:
        """Live accessor for a selector on this page."""
        return LiveQuery(selector, self.page, description)

    def open(self, page_cls: Type[P]) -> P:
        """Page object for another screen sharing this page handle."""
        return page_cls(self.page, self.settings, self.actions)

    # =========================================================================
    # Navigation
    # =========================================================================

    def visit(self: P) -> P:
        """Navigate to this page's route and wait for the load gate."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            self.page.goto(
                self.url,
                timeout=self.settings.page_load_timeout,
                wait_until="domcontentloaded",
            )
            logger.debug(f"Navigated to: {self.url}")
        return self.wait_for_page_load()

    def wait_for_page_load(self: P) -> P:
        """Wait until the load gate element is visible."""
        self.actions.expect_visible(
            self.element(self.LOAD_GATE, f"{type(self).__name__} load gate"),
            timeout=self.settings.page_load_timeout,
        )
        return self

    # =========================================================================
    # Page Helpers
    # =========================================================================

    def get_title(self) -> str:
        return self.page.title()

    def get_url(self) -> str:
        return self.page.url

    def scroll_to(self: P, position: Union[str, Tuple[int, int]] = "bottom") -> P:
        """
        Scroll the window.

        Args:
            position: "top", "bottom", "center" or an (x, y) tuple
        """
        scripts = {
            "top": "window.scrollTo(0, 0)",
            "bottom": "window.scrollTo(0, document.body.scrollHeight)",
            "center": "window.scrollTo(0, document.body.scrollHeight / 2)",
        }
        if isinstance(position, tuple):
            x, y = position
            script = f"window.scrollTo({int(x)}, {int(y)})"
        elif position in scripts:
            script = scripts[position]
        else:
            raise ValueError(f"Unknown scroll position: {position}")

        with allure.step(f"Scroll to {position}"):
            self.page.evaluate(script)
        return self

    def scroll_to_element(self: P, selector: Union[str, LiveQuery]) -> P:
        with allure.step(f"Scroll to element: {selector}"):
            self.actions.scroll_into_view(selector)
        return self

    def wait_for_element(
        self: P,
        selector: Union[str, LiveQuery],
        timeout: Optional[int] = None,
    ) -> P:
        """Wait until the element is visible (default command timeout)."""
        self.actions.expect_visible(selector, timeout=timeout)
        return self

    def take_screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "Awaitable",
    "Navigable",
    "PageBase",
    "SCREENSHOT_DIR",
]
