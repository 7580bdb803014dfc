"""
Repository-level pytest configuration.

Why this exists:
  - Provide defaults pointing at the public storefront (no secrets embedded)
  - Register the `--live` switch that opts into tests hitting the real site
  - Configure loguru once for the whole run

Important:
  Credentials in config.yaml are placeholders. Real runs should provide them through
  the environment (TEST_DATA_EMAIL / TEST_DATA_PASSWORD).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from storefront_tools.common.global_config import init_logger


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run tests against the live storefront (also: RUN_LIVE_TESTS=1)",
    )


def pytest_configure(config):
    init_logger(
        level=os.getenv("LOGGING_LEVEL", "INFO"),
        log_file=os.getenv("LOGGING_FILE") or None,
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _storefront_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.

    ConfigLoader reads these before the YAML file, so a CI job can retarget
    the suites without editing config.yaml.
    """
    defaults = {
        # UI
        "UI_BASE_URL": "https://automationexercise.com",
        # API
        "API_BASE_URL": "https://automationexercise.com/api",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
