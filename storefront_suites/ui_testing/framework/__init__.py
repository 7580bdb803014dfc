"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the storefront.

Components:
    - locators: LiveQuery lazy element accessors
    - element_actions: Polling interactions and assertions
    - page_base: Base page object and page capability protocols
    - browser_session: State isolation, page error policy, failure diagnostics
    - command_registry / commands: Named reusable test commands

Author: Automation Team
License: MIT
================================================================================
"""

from .locators import LiveQuery
from .element_actions import ElementActions, ElementAssertionError
from .page_base import Awaitable, Navigable, PageBase
from .browser_session import (
    BrowserSession,
    FailureDiagnostics,
    PageErrorPolicy,
    PageRuntimeError,
)
from .command_registry import (
    BoundCommands,
    CommandContext,
    CommandRegistrationError,
    CommandRegistry,
    UnknownCommandError,
)
from .commands import build_default_registry

__all__ = [
    "LiveQuery",
    "ElementActions",
    "ElementAssertionError",
    "Awaitable",
    "Navigable",
    "PageBase",
    "BrowserSession",
    "FailureDiagnostics",
    "PageErrorPolicy",
    "PageRuntimeError",
    "BoundCommands",
    "CommandContext",
    "CommandRegistrationError",
    "CommandRegistry",
    "UnknownCommandError",
    "build_default_registry",
]
