"""
================================================================================
Storefront Tools Common Utilities
================================================================================

Shared settings, logging setup and wait primitives for the harness.

Exports:
    - HarnessSettings / load_settings: typed view over the configuration
    - init_logger: Function to initialize loguru logger with standard settings
    - poll / retry_until: retry-until-timeout combinators

Usage:
    from storefront_tools.common import init_logger, poll

    init_logger(level="DEBUG")
    result = poll(lambda: (page.url.endswith("/"), page.url))

================================================================================
"""

from .global_config import HarnessSettings, init_logger, load_settings
from .wait_helpers import (
    PollResult,
    WaitConfig,
    WaitTimeoutError,
    get_wait_config,
    poll,
    retry_until,
)

__all__ = [
    "HarnessSettings",
    "load_settings",
    "init_logger",
    "PollResult",
    "WaitConfig",
    "WaitTimeoutError",
    "get_wait_config",
    "poll",
    "retry_until",
]
