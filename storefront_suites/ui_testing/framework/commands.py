"""
================================================================================
Built-in Commands
================================================================================

Reusable multi-step test procedures. Each command takes the CommandContext
first, composes ElementActions / Playwright / HttpClient primitives and holds
no state of its own.

Groups:
    - Authentication: login, logout
    - Navigation and forms: navigate_to_page, fill_contact_form, fill_signup_form
    - Products: add_product_to_cart, search_product
    - Assertions and waits: should_*, wait_for_element, wait_for_api
    - API: api_request, api_get, api_post, api_put, api_delete
    - Browser state: local storage and cookies
    - DOM helpers: upload_file, table rows/cells, iframe body, date picker,
      drag and drop, take_screenshot
    - reset_database (mock)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Mapping, Optional, Union

import allure
from loguru import logger
from playwright.sync_api import Response

from storefront_suites.api_testing.framework.http_client import ApiResponse, HttpClientError
from storefront_tools.data_generator import ContactMessage

from .command_registry import CommandContext, CommandRegistry
from .locators import LiveQuery


# Named routes accepted by navigate_to_page; the signup form lives on /login
PAGE_ROUTES: Dict[str, str] = {
    "home": "/",
    "products": "/products",
    "cart": "/view_cart",
    "login": "/login",
    "contact": "/contact_us",
    "signup": "/login",
}

ACCEPTED_API_STATUSES = (200, 201, 202)


# =============================================================================
# Authentication
# =============================================================================

def login(ctx: CommandContext, email: str, password: str) -> None:
    """Log in through the form and wait until the browser leaves /login."""
    ctx.page.goto(
        f"{ctx.settings.base_url}/login",
        timeout=ctx.settings.page_load_timeout,
        wait_until="domcontentloaded",
    )
    ctx.actions.fill('[data-qa="login-email"]', email, "Login email")
    ctx.actions.fill('[data-qa="login-password"]', password, "Login password")
    ctx.actions.click('[data-qa="login-button"]', "Login button")
    ctx.actions.expect_url_not_contains("/login", description="login form submit")


def logout(ctx: CommandContext) -> None:
    ctx.actions.click('a[href="/logout"]', "Logout link")
    ctx.actions.expect_url_contains("/login", description="logout")


# =============================================================================
# Navigation and Forms
# =============================================================================

def navigate_to_page(ctx: CommandContext, page_name: str) -> str:
    """Visit a named route (home, products, cart, ...) or a raw path."""
    path = PAGE_ROUTES.get(page_name, page_name)
    url = path if path.startswith("http") else f"{ctx.settings.base_url}{path}"
    ctx.page.goto(url, timeout=ctx.settings.page_load_timeout, wait_until="domcontentloaded")
    return url


def fill_contact_form(ctx: CommandContext, contact: Union[ContactMessage, Mapping[str, str]]) -> None:
    data = contact.to_dict() if isinstance(contact, ContactMessage) else dict(contact)
    for field in ("name", "email", "subject", "message"):
        ctx.actions.type_text(f'[data-qa="{field}"]', data[field], f"Contact {field}")


def fill_signup_form(ctx: CommandContext, name: str, email: str) -> None:
    ctx.actions.fill('[data-qa="signup-name"]', name, "Signup name")
    ctx.actions.fill('[data-qa="signup-email"]', email, "Signup email")
    ctx.actions.click('[data-qa="signup-button"]', "Signup button")


# =============================================================================
# Products
# =============================================================================

def add_product_to_cart(ctx: CommandContext, index: int = 0) -> None:
    """Add the index-th listed product and dismiss the modal (continue shopping)."""
    product = LiveQuery(".productinfo", ctx.page, "Product card").eq(index)
    ctx.actions.click(product.find(".add-to-cart", f"Add to cart [{index}]"))
    ctx.actions.click(".modal-footer .btn-success", "Continue shopping")


def search_product(ctx: CommandContext, term: str) -> None:
    ctx.actions.type_text("#search_product", term, "Search input")
    ctx.actions.click("#submit_search", "Search button")


# =============================================================================
# Assertions and Waits
# =============================================================================

def should_be_visible(ctx: CommandContext, selector: str) -> None:
    ctx.actions.expect_visible(selector)


def should_contain_text(ctx: CommandContext, selector: str, text: str) -> None:
    ctx.actions.expect_contains_text(selector, text)


def should_have_attribute(ctx: CommandContext, selector: str, attribute: str, value: str) -> None:
    ctx.actions.expect_attribute(selector, attribute, value)


def wait_for_element(ctx: CommandContext, selector: str, timeout: int = 10000) -> None:
    ctx.actions.expect_visible(selector, timeout=timeout)


def wait_for_api(
    ctx: CommandContext,
    url_pattern: Any,
    trigger: Callable[[], Any],
    timeout: Optional[int] = None,
) -> Response:
    """
    Run `trigger` while waiting for a matching network response.

    Args:
        url_pattern: URL glob, regex or predicate (Playwright semantics)
        trigger: Action that causes the request
        timeout: Response timeout in ms (settings.response_timeout by default)

    Returns:
        The Playwright Response, whose status is 200, 201 or 202
    """
    timeout = timeout or ctx.settings.response_timeout
    with allure.step(f"Wait for API response: {url_pattern}"):
        with ctx.page.expect_response(url_pattern, timeout=timeout) as response_info:
            trigger()
        response = response_info.value
        logger.info(f"Intercepted {response.url} -> {response.status}")
        if response.status not in ACCEPTED_API_STATUSES:
            raise AssertionError(
                f"Expected {response.url} to answer with one of "
                f"{ACCEPTED_API_STATUSES}, got {response.status}"
            )
        return response


# =============================================================================
# API
# =============================================================================

def api_request(
    ctx: CommandContext,
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> ApiResponse:
    """One HTTP call against the API base URL; any status is returned as data."""
    if ctx.http is None:
        raise HttpClientError("api_* commands need an HttpClient in the command context")
    return ctx.http.request(method, path, body=body, headers=headers)


def api_get(ctx: CommandContext, path: str, headers: Optional[Mapping[str, str]] = None) -> ApiResponse:
    return api_request(ctx, "GET", path, None, headers)


def api_post(
    ctx: CommandContext,
    path: str,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> ApiResponse:
    return api_request(ctx, "POST", path, body, headers)


def api_put(
    ctx: CommandContext,
    path: str,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> ApiResponse:
    return api_request(ctx, "PUT", path, body, headers)


def api_delete(ctx: CommandContext, path: str, headers: Optional[Mapping[str, str]] = None) -> ApiResponse:
    return api_request(ctx, "DELETE", path, None, headers)


# =============================================================================
# Browser State
# =============================================================================

def set_local_storage(ctx: CommandContext, key: str, value: str) -> None:
    ctx.page.evaluate("([k, v]) => window.localStorage.setItem(k, v)", [key, value])


def get_local_storage(ctx: CommandContext, key: str) -> Optional[str]:
    return ctx.page.evaluate("(k) => window.localStorage.getItem(k)", key)


def set_cookie(ctx: CommandContext, name: str, value: str, **options: Any) -> None:
    """Add a cookie; scoped to the storefront URL unless a domain or url is given."""
    cookie: Dict[str, Any] = {"name": name, "value": value, **options}
    if "url" not in cookie and "domain" not in cookie:
        cookie["url"] = ctx.settings.base_url
    if "domain" in cookie:
        cookie.setdefault("path", "/")
    ctx.page.context.add_cookies([cookie])


def get_cookie_value(ctx: CommandContext, name: str) -> Optional[str]:
    for cookie in ctx.page.context.cookies():
        if cookie["name"] == name:
            return cookie["value"]
    return None


# =============================================================================
# DOM Helpers
# =============================================================================

def upload_file(ctx: CommandContext, selector: str, file_path: str) -> None:
    ctx.actions.upload_file(selector, file_path)


def get_table_row(ctx: CommandContext, table_selector: str, row: int) -> LiveQuery:
    return LiveQuery(f"{table_selector} tbody tr", ctx.page, f"{table_selector} row").eq(row)


def get_table_cell(ctx: CommandContext, table_selector: str, row: int, column: int) -> LiveQuery:
    return get_table_row(ctx, table_selector, row).find("td").eq(column)


def get_iframe_body(ctx: CommandContext, iframe_selector: str) -> LiveQuery:
    """Body of an iframe, once it has rendered."""
    body = LiveQuery("body", ctx.page.frame_locator(iframe_selector), f"{iframe_selector} body")
    ctx.actions.expect_visible(body)
    return body


def select_date(ctx: CommandContext, picker_selector: str, date: str) -> None:
    ctx.actions.click(picker_selector, "Date picker")
    ctx.actions.click(LiveQuery(f".datepicker >> text={date}", ctx.page, f"Date {date}").first())


def drag_and_drop(ctx: CommandContext, source: str, target: str) -> None:
    ctx.actions.drag_and_drop(source, target)


def take_screenshot(ctx: CommandContext, name: Optional[str] = None) -> bytes:
    name = name or f"screenshot-{int(time.time() * 1000)}"
    screenshot = ctx.page.screenshot(full_page=True)
    allure.attach(screenshot, name=name, attachment_type=allure.attachment_type.PNG)
    return screenshot


def reset_database(ctx: CommandContext) -> None:
    # Mock: the storefront offers no reset endpoint
    logger.info("Database reset completed")


BUILTIN_COMMANDS = (
    login,
    logout,
    navigate_to_page,
    fill_contact_form,
    fill_signup_form,
    add_product_to_cart,
    search_product,
    should_be_visible,
    should_contain_text,
    should_have_attribute,
    wait_for_element,
    wait_for_api,
    api_request,
    api_get,
    api_post,
    api_put,
    api_delete,
    set_local_storage,
    get_local_storage,
    set_cookie,
    get_cookie_value,
    upload_file,
    get_table_row,
    get_table_cell,
    get_iframe_body,
    select_date,
    drag_and_drop,
    take_screenshot,
    reset_database,
)


def build_default_registry() -> CommandRegistry:
    """Registry holding every built-in command, already frozen."""
    registry = CommandRegistry()
    for fn in BUILTIN_COMMANDS:
        registry.register(fn.__name__, fn)
    logger.debug(f"Built command registry with {len(registry)} commands")
    return registry.freeze()


__all__ = [
    "BUILTIN_COMMANDS",
    "PAGE_ROUTES",
    "build_default_registry",
]
