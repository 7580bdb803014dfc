"""
================================================================================
Command Registry
================================================================================

Named, reusable test commands (login, add_product_to_cart, api_get, ...)
registered once at startup and bound to a test's page, actions, HTTP client
and settings.

Rules:
    - A name can be registered only once; a duplicate is a startup error
    - After `freeze()` the registry is read-only
    - Calling an unknown command fails with the list of known names

Usage:
    registry = CommandRegistry()

    @registry.command("open_home")
    def open_home(ctx: CommandContext) -> None:
        ctx.page.goto(ctx.settings.base_url)

    registry.freeze()
    commands = registry.bind(CommandContext(page, actions, http, settings))
    commands.open_home()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

import allure
from loguru import logger
from playwright.sync_api import Page

from storefront_tools.common.global_config import HarnessSettings

from .element_actions import ElementActions


CommandFn = Callable[..., Any]


class CommandRegistrationError(Exception):
    """Raised for duplicate names or registration after freeze."""
    pass


class UnknownCommandError(AttributeError):
    """Raised when a bound command name was never registered."""
    pass


@dataclass
class CommandContext:
    """
    Everything a command may touch.

    Attributes:
        page: Playwright Page of the current test
        actions: Polling interaction helpers for that page
        http: HttpClient for api_* commands (None for UI-only tests)
        settings: Harness settings
    """
    page: Page
    actions: ElementActions
    http: Optional[Any] = None
    settings: Optional[HarnessSettings] = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = HarnessSettings()


class CommandRegistry:
    """Name -> command function map, frozen after build."""

    def __init__(self) -> None:
        self._commands: Dict[str, CommandFn] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, fn: CommandFn) -> CommandFn:
        """
        Register `fn(ctx, *args, **kwargs)` under `name`.

        Raises:
            CommandRegistrationError: Name taken, invalid or registry frozen
        """
        if self._frozen:
            raise CommandRegistrationError(
                f"Cannot register '{name}': registry is frozen"
            )
        if not name.isidentifier():
            raise CommandRegistrationError(
                f"Command name '{name}' is not a valid identifier"
            )
        if name in self._commands:
            raise CommandRegistrationError(f"Command '{name}' is already registered")

        self._commands[name] = fn
        logger.debug(f"Registered command: {name}")
        return fn

    def command(self, name: Optional[str] = None) -> Callable[[CommandFn], CommandFn]:
        """Decorator form of `register`; defaults to the function name."""
        def decorator(fn: CommandFn) -> CommandFn:
            return self.register(name or fn.__name__, fn)
        return decorator

    def freeze(self) -> "CommandRegistry":
        self._frozen = True
        return self

    def get(self, name: str) -> CommandFn:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(
                f"Unknown command '{name}'. Registered: {', '.join(self.names())}"
            ) from None

    def names(self) -> List[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._commands)

    def bind(self, context: CommandContext) -> "BoundCommands":
        return BoundCommands(self, context)


class BoundCommands:
    """Registry commands exposed as methods with the context pre-applied."""

    def __init__(self, registry: CommandRegistry, context: CommandContext):
        self._registry = registry
        self.context = context

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        fn = self._registry.get(name)
        context = self.context

        def invoke(*args: Any, **kwargs: Any) -> Any:
            with allure.step(f"Command: {name}"):
                logger.info(f"Running command: {name}")
                return fn(context, *args, **kwargs)

        invoke.__name__ = name
        invoke.__doc__ = fn.__doc__
        return invoke

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._registry.names()))


__all__ = [
    "BoundCommands",
    "CommandContext",
    "CommandRegistrationError",
    "CommandRegistry",
    "UnknownCommandError",
]
