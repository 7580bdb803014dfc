"""
================================================================================
Global Configuration for Automation Tools
================================================================================

Harness-wide settings and logging setup.

Features:
    - Typed HarnessSettings built from any dot-path config source
    - Centralized Loguru logging configuration (console + optional file)

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from loguru import logger


DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


# ============================================================
# Harness Settings
# ============================================================

@dataclass(frozen=True)
class HarnessSettings:
    """
    Injected parameters read by page objects, commands and the HTTP client.

    All timeouts are in milliseconds (Playwright convention).
    """
    base_url: str = "https://automationexercise.com"
    api_base_url: str = "https://automationexercise.com/api"
    default_command_timeout: int = 10000
    page_load_timeout: int = 30000
    request_timeout: int = 10000
    response_timeout: int = 10000
    run_mode_retries: int = 2
    open_mode_retries: int = 0
    viewport: Dict[str, int] = field(
        default_factory=lambda: {"width": 1280, "height": 720}
    )
    test_email: str = "test@example.com"
    test_password: str = "password123"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def retries_for(self, interactive: bool) -> int:
        """Whole-test retry count for interactive (open) or unattended runs."""
        return self.open_mode_retries if interactive else self.run_mode_retries


def load_settings(config: Any) -> HarnessSettings:
    """
    Build HarnessSettings from a config object exposing `get(key, default)`.

    Args:
        config: ConfigLoader (or compatible) instance

    Returns:
        Frozen HarnessSettings
    """
    defaults = HarnessSettings()
    viewport = {
        "width": int(config.get("viewport.width", defaults.viewport["width"])),
        "height": int(config.get("viewport.height", defaults.viewport["height"])),
    }
    return HarnessSettings(
        base_url=str(config.get("ui.base_url", defaults.base_url)).rstrip("/"),
        api_base_url=str(config.get("api.base_url", defaults.api_base_url)).rstrip("/"),
        default_command_timeout=int(
            config.get("timeouts.default_command", defaults.default_command_timeout)
        ),
        page_load_timeout=int(config.get("timeouts.page_load", defaults.page_load_timeout)),
        request_timeout=int(config.get("timeouts.request", defaults.request_timeout)),
        response_timeout=int(config.get("timeouts.response", defaults.response_timeout)),
        run_mode_retries=int(config.get("retries.run_mode", defaults.run_mode_retries)),
        open_mode_retries=int(config.get("retries.open_mode", defaults.open_mode_retries)),
        viewport=viewport,
        test_email=config.get("test_data.email", defaults.test_email),
        test_password=config.get("test_data.password", defaults.test_password),
        log_level=config.get("logging.level", defaults.log_level),
        log_file=config.get("logging.file", defaults.log_file),
    )


# ============================================================
# Logging Setup
# ============================================================

def init_logger(
    level: str = "INFO",
    format_string: str = None,
    log_file: str = None
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Safe to call repeatedly; only the first call configures sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/harness.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    # Remove default handler
    logger.remove()

    format_string = format_string or DEFAULT_LOG_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level.upper(),
        colorize=True,
    )

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level.upper(),
            rotation="10 MB",
            retention="7 days",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


__all__ = [
    "HarnessSettings",
    "load_settings",
    "init_logger",
]
