"""
================================================================================
Live Locator Queries
================================================================================

Page objects expose their elements as properties returning a LiveQuery: a
selector chain plus the context it resolves against (a Page, a FrameLocator
or a parent Locator).

Nothing is cached. Every `resolve()` asks the context for a fresh Locator, so
a query built before a re-render still finds the new element. Narrowing with
`eq()` / `find()` only extends the selector chain and never touches the DOM;
an out-of-range index fails at first use, not at construction.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from playwright.sync_api import FrameLocator, Locator, Page


Context = Union[Page, FrameLocator, Locator]


def resolve(selector: str, context: Context) -> Locator:
    """Resolve a selector against its context; a new Locator on every call."""
    return context.locator(selector)


@dataclass(frozen=True)
class LiveQuery:
    """
    Lazily-resolved element handle.

    Attributes:
        selector: Playwright selector chain (CSS, `>> nth=i` segments allowed)
        context: Object exposing `.locator(selector)`
        description: Human-readable name for logs and failures
    """
    selector: str
    context: Any
    description: str = ""

    @property
    def label(self) -> str:
        return self.description or self.selector

    def resolve(self) -> Locator:
        return resolve(self.selector, self.context)

    def eq(self, index: int) -> "LiveQuery":
        """The index-th match (0-based)."""
        return LiveQuery(
            f"{self.selector} >> nth={index}",
            self.context,
            f"{self.label} [{index}]",
        )

    def first(self) -> "LiveQuery":
        return self.eq(0)

    def find(self, sub_selector: str, description: str = "") -> "LiveQuery":
        """Descendants of this query matching `sub_selector`."""
        return LiveQuery(
            f"{self.selector} >> {sub_selector}",
            self.context,
            description or f"{self.label} {sub_selector}",
        )

    def __str__(self) -> str:
        return f"{self.label} ({self.selector})"


__all__ = [
    "Context",
    "LiveQuery",
    "resolve",
]
