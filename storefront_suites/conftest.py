"""
================================================================================
Suites Pytest Configuration
================================================================================

This module provides the shared pytest configuration for the storefront
suites. It registers common markers, tags tests by suite and keeps tests
that talk to the live storefront behind an explicit opt-in. The account
fixtures shared by the API and UI suites live here as well.

================================================================================
"""

import os
from typing import Generator

import pytest

from storefront_suites.api_testing.framework import HttpClient, registered_account
from storefront_tools.data_generator import User, generate_user


LIVE_SUITES = ("api_testing", "ui_testing")


def live_enabled(config) -> bool:
    return bool(config.getoption("--live")) or os.getenv("RUN_LIVE_TESTS") == "1"


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user journeys"
    )
    config.addinivalue_line(
        "markers", "performance: Response time checks"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: API-specific tests"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the harness itself"
    )
    config.addinivalue_line(
        "markers", "live: Talks to the real storefront; needs --live or RUN_LIVE_TESTS=1"
    )


def pytest_collection_modifyitems(config, items):
    """
    Tag collected tests by suite and skip live tests unless opted in.
    """
    run_live = live_enabled(config)
    skip_live = pytest.mark.skip(reason="live storefront test (use --live or RUN_LIVE_TESTS=1)")

    for item in items:
        path = str(item.fspath)

        # Auto-add 'api' marker to tests in api_testing directory
        if "api_testing" in path:
            item.add_marker(pytest.mark.api)

        # Auto-add 'ui' marker to tests in ui_testing directory
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        if os.sep + "unit" + os.sep in path:
            item.add_marker(pytest.mark.unit)

        if any(suite in path for suite in LIVE_SUITES):
            item.add_marker(pytest.mark.live)
            if not run_live:
                item.add_marker(skip_live)


# ================================================================================
# Shared Account Fixtures
# ================================================================================

@pytest.fixture
def new_user() -> User:
    """A generated user that does not exist on the storefront yet."""
    return generate_user()


@pytest.fixture
def registered_user(api_client: HttpClient, new_user: User) -> Generator[User, None, None]:
    """
    `new_user` registered through the API and deleted after the test.

    Each suite provides its own `api_client`. UI journeys log in with this
    account, so no credentials have to live in configuration.
    """
    with registered_account(api_client, new_user) as user:
        yield user


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Storefront Automation Harness",
        f"Live storefront tests: {'enabled' if live_enabled(config) else 'skipped'}",
        "=" * 60,
        "",
    ]
