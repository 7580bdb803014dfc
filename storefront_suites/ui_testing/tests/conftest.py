"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests. pytest-playwright owns the
browser, context and page lifecycle; the fixtures here layer the harness on
top of its `page`: settings, polling actions, the command registry, state
isolation, page objects and failure diagnostics.

Key Features:
- Viewport and base URL from configuration
- Page Object fixtures for all pages
- Fresh cookies/storage before every test
- Screenshot, URL, page errors and recent API calls captured on failure

================================================================================
"""

from typing import Generator

import pytest
from loguru import logger
from playwright.sync_api import Page

from storefront_suites.api_testing.framework import ConfigLoader, HttpClient
from storefront_suites.ui_testing.framework import (
    BoundCommands,
    BrowserSession,
    CommandContext,
    CommandRegistry,
    ElementActions,
    PageErrorPolicy,
    build_default_registry,
)
from storefront_suites.ui_testing.pages import (
    CartPage,
    ContactPage,
    HomePage,
    LoginPage,
    ProductDetailsPage,
    ProductsPage,
    SignupPage,
)
from storefront_tools.common import HarnessSettings


# ================================================================================
# Harness Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def settings() -> HarnessSettings:
    """Harness settings resolved once per session (env > YAML > defaults)."""
    return ConfigLoader().settings


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, settings: HarnessSettings):
    """Extend pytest-playwright's context options with the configured viewport."""
    return {
        **browser_context_args,
        "viewport": dict(settings.viewport),
        "base_url": settings.base_url,
    }


@pytest.fixture(scope="session")
def registry() -> CommandRegistry:
    """Built-in commands, registered once and frozen."""
    return build_default_registry()


@pytest.fixture
def api_client(settings: HarnessSettings) -> Generator[HttpClient, None, None]:
    """API client for commands, diagnostics and account setup."""
    with HttpClient(settings=settings) as client:
        yield client


@pytest.fixture
def actions(page: Page, settings: HarnessSettings) -> ElementActions:
    return ElementActions(page, default_timeout=settings.default_command_timeout)


@pytest.fixture
def commands(
    registry: CommandRegistry,
    page: Page,
    actions: ElementActions,
    api_client: HttpClient,
    settings: HarnessSettings,
) -> BoundCommands:
    """
    Registry commands bound to this test's page.

    Usage:
        def test_example(commands):
            commands.navigate_to_page("products")
            commands.add_product_to_cart(0)
    """
    return registry.bind(CommandContext(page, actions, api_client, settings))


@pytest.fixture
def page_error_policy() -> PageErrorPolicy:
    """Uncaught page errors come from third-party ad scripts; record only."""
    return PageErrorPolicy()


@pytest.fixture
def browser_session(
    request,
    page: Page,
    settings: HarnessSettings,
    page_error_policy: PageErrorPolicy,
    api_client: HttpClient,
) -> BrowserSession:
    session = BrowserSession(page, settings, error_policy=page_error_policy, http=api_client)
    # Picked up by pytest_runtest_makereport on failure
    request.node.browser_session = session
    return session


@pytest.fixture(autouse=True)
def isolated_browser_state(browser_session: BrowserSession) -> Generator[None, None, None]:
    """Start every test with no cookies, empty storage and the configured viewport."""
    browser_session.reset_state()
    yield
    browser_session.error_policy.raise_if_fatal()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(page: Page, settings: HarnessSettings, actions: ElementActions) -> HomePage:
    """
    Provides HomePage already opened and loaded.

    Most journeys start from the home page, as the live site's navigation
    links are the entry points to every other screen.
    """
    return HomePage(page, settings, actions).visit()


@pytest.fixture
def login_page(page: Page, settings: HarnessSettings, actions: ElementActions) -> LoginPage:
    return LoginPage(page, settings, actions)


@pytest.fixture
def signup_page(page: Page, settings: HarnessSettings, actions: ElementActions) -> SignupPage:
    return SignupPage(page, settings, actions)


@pytest.fixture
def products_page(page: Page, settings: HarnessSettings, actions: ElementActions) -> ProductsPage:
    return ProductsPage(page, settings, actions)


@pytest.fixture
def product_details_page(
    page: Page, settings: HarnessSettings, actions: ElementActions
) -> ProductDetailsPage:
    return ProductDetailsPage(page, settings, actions)


@pytest.fixture
def cart_page(page: Page, settings: HarnessSettings, actions: ElementActions) -> CartPage:
    return CartPage(page, settings, actions)


@pytest.fixture
def contact_page(page: Page, settings: HarnessSettings, actions: ElementActions) -> ContactPage:
    return ContactPage(page, settings, actions)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture failure details for UI tests.

    Fires the session's diagnostics hooks (screenshot, URL, page errors,
    recent API calls) and attaches them to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        session = getattr(item, "browser_session", None)
        if session is not None:
            logger.error(f"UI test failed: {item.nodeid}")
            session.capture_failure(item.name)
