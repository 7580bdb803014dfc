"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (storefront_suites/config/config.yaml)
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Dot notation path access with built-in harness defaults
    - Typed HarnessSettings view for page objects, commands and clients

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from storefront_tools.common.global_config import HarnessSettings, load_settings


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Values used when neither the YAML file nor the environment provides a key
DEFAULTS: Dict[str, Any] = {
    "ui": {"base_url": "https://automationexercise.com"},
    "api": {"base_url": "https://automationexercise.com/api"},
    "timeouts": {
        "default_command": 10000,
        "page_load": 30000,
        "request": 10000,
        "response": 10000,
    },
    "retries": {"run_mode": 2, "open_mode": 0},
    "viewport": {"width": 1280, "height": 720},
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (API_BASE_URL)
        2. YAML configuration file
        3. Built-in DEFAULTS
        4. Caller-supplied default

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("api.base_url")
        'https://automationexercise.com/api'

        >>> config.get("timeouts.page_load")
        30000

    Environment Variable Mapping:
        - ui.base_url -> UI_BASE_URL
        - api.base_url -> API_BASE_URL
        - timeouts.default_command -> TIMEOUTS_DEFAULT_COMMAND
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        # One loader per process; later constructions reuse the first file read
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to read. Defaults to
                storefront_suites/config/config.yaml.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        if not self._config_path.exists():
            logger.warning(
                f"No configuration file at {self._config_path}; "
                f"falling back to built-in defaults and environment variables"
            )
            self._config = {}
            return

        try:
            self._config = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{self._config_path} is not valid YAML: {e}") from e
        logger.debug(f"Loaded configuration from: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Resolve a dot-notation key (e.g. "timeouts.page_load").

        The environment variable named after the key wins, then the YAML
        file, then DEFAULTS, then `default`. Environment strings are
        coerced to the type of the value they replace.
        """
        builtin = self._lookup(DEFAULTS, key)
        reference = builtin if builtin is not None else default

        # Check environment variable first
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, reference)

        value = self._lookup(self._config, key)
        if value is not None:
            return value
        return reference

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Built-in defaults for `section` overlaid with its YAML values.

        Environment overrides are not applied; use `get` for single keys.
        """
        merged = dict(DEFAULTS.get(section, {}))
        merged.update(self._config.get(section) or {})
        return merged

    @property
    def settings(self) -> HarnessSettings:
        """Typed snapshot of the current configuration."""
        return load_settings(self)

    def reload(self) -> None:
        """Re-read the YAML file; the next `settings` snapshot sees the changes."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    @staticmethod
    def _lookup(tree: Dict[str, Any], key: str) -> Any:
        """Navigate a nested dict by dot notation; None when absent."""
        value: Any = tree
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                return None
            if value is None:
                return None
        return value

    @staticmethod
    def _convert_type(value: str, reference: Any) -> Any:
        """
        Coerce an environment string to the type of the value it overrides.

        Unparseable numbers are kept as strings so the caller sees what was set.
        """
        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        for number_type in (int, float):
            if isinstance(reference, number_type):
                try:
                    return number_type(value)
                except ValueError:
                    return value
        return value

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next ConfigLoader() reads its file again."""
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULTS",
]
