"""
Fixtures for the offline unit suite: a simulated storefront page, short
timeouts and the default command registry bound to both.
"""

import httpx
import pytest

from storefront_suites.api_testing.framework.http_client import HttpClient
from storefront_suites.ui_testing.framework.command_registry import CommandContext
from storefront_suites.ui_testing.framework.commands import build_default_registry
from storefront_suites.ui_testing.framework.element_actions import ElementActions
from storefront_suites.unit.storefront_fake import BASE_URL, FakePage
from storefront_tools.common.global_config import HarnessSettings


@pytest.fixture
def settings() -> HarnessSettings:
    return HarnessSettings(
        base_url=BASE_URL,
        api_base_url=f"{BASE_URL}/api",
        default_command_timeout=500,
        page_load_timeout=1000,
        request_timeout=1000,
        response_timeout=1000,
    )


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage(BASE_URL)


@pytest.fixture
def actions(fake_page, settings) -> ElementActions:
    return ElementActions(fake_page, default_timeout=settings.default_command_timeout)


@pytest.fixture(scope="session")
def registry():
    return build_default_registry()


@pytest.fixture
def api_calls():
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def http_client(settings, api_calls):
    def handler(request: httpx.Request) -> httpx.Response:
        api_calls.append(request)
        if request.url.path.endswith("/productsList"):
            return httpx.Response(200, text='{"responseCode": 200, "products": []}')
        return httpx.Response(404, text='{"responseCode": 404, "message": "Not found"}')

    with HttpClient(settings=settings, transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
def commands(registry, fake_page, actions, http_client, settings):
    return registry.bind(CommandContext(fake_page, actions, http_client, settings))
