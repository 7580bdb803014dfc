"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for the storefront API tests. The API takes form-encoded
parameters and answers HTTP 200 with the outcome in `responseCode`, so
most assertions read the body rather than the status line.

Fixtures:
    - config / settings: Configuration loader and harness settings
    - api_client: HTTP client bound to the API base URL
    - new_user / registered_user: shared, see storefront_suites/conftest.py

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Generator

import allure
import pytest

from storefront_suites.api_testing.framework import ConfigLoader, HttpClient
from storefront_tools.common import HarnessSettings


# =============================================================================
# Session-Scoped Fixtures (Shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """
    Provide configuration loader instance.

    Session-scoped to ensure configuration is loaded only once.
    """
    return ConfigLoader()


@pytest.fixture(scope="session")
def settings(config: ConfigLoader) -> HarnessSettings:
    return config.settings


# =============================================================================
# Function-Scoped Fixtures (Fresh for each test)
# =============================================================================

@pytest.fixture
def api_client(settings: HarnessSettings) -> Generator[HttpClient, None, None]:
    """
    Provide an HTTP client for the storefront API.

    Usage:
        def test_example(api_client):
            response = api_client.get("/productsList")
            assert response.body["responseCode"] == 200
    """
    with HttpClient(settings=settings) as client:
        yield client


# =============================================================================
# Allure Reporting Hooks
# =============================================================================

def pytest_exception_interact(node, call, report):
    """Attach additional info on test failure."""
    if report.failed:
        allure.attach(
            str(call.excinfo.value),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT
        )
