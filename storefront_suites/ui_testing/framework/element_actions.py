# ================================================================================
# Element Actions Module
# ================================================================================
#
# Shared wait-and-act layer for page objects and commands. Every interaction
# and every DOM assertion is a poll: the target is re-resolved on each attempt
# and retried until it succeeds or the command timeout elapses.
#
# Key Features:
#   - Actions retried until actionable (click, fill, select, upload, ...)
#   - Assertions polled until true, failing with the last observed value
#   - Targets given as selector strings, LiveQuery or Playwright Locator
#   - Allure step integration
#   - Keyboard, drag and drop and synthetic event support
#
# ================================================================================

from typing import Any, Callable, List, Optional, Tuple, Union

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page

from storefront_tools.common.wait_helpers import WaitConfig, poll

from .locators import LiveQuery


Target = Union[str, LiveQuery, Locator]

# Upper bound for a single Playwright attempt inside a poll
ATTEMPT_TIMEOUT_MS = 1000


class ElementAssertionError(AssertionError):
    """A UI predicate or interaction did not hold before the timeout."""

    def __init__(
        self,
        target: str,
        condition: str,
        observed: Any = None,
        timeout_ms: Optional[int] = None,
        last_error: Optional[BaseException] = None,
    ):
        self.target = target
        self.condition = condition
        self.observed = observed
        self.timeout_ms = timeout_ms
        self.last_error = last_error

        message = "Timed out"
        if timeout_ms is not None:
            message += f" after {timeout_ms}ms"
        message += f" waiting for {target} to {condition}. Last observed: {observed!r}"
        if last_error is not None:
            message += f" (last error: {str(last_error).splitlines()[0]})"
        super().__init__(message)


class ElementActions:
    """
    Polling interaction and assertion helpers bound to one page.

    Example:
        actions = ElementActions(page, default_timeout=10000)
        actions.fill('[data-qa="login-email"]', "user@example.com")
        actions.click(LiveQuery('[data-qa="login-button"]', page, "Login button"))
        actions.expect_url_not_contains("/login")
    """

    def __init__(self, page: Page, default_timeout: int = 10000):
        """
        Args:
            page: Playwright Page object
            default_timeout: Default timeout for operations in milliseconds
        """
        self.page = page
        self.default_timeout = default_timeout

    # =========================================================================
    # Internals
    # =========================================================================

    def _get_locator(self, target: Target) -> Locator:
        """Fresh Locator for the target."""
        if isinstance(target, LiveQuery):
            return target.resolve()
        if isinstance(target, str):
            return self.page.locator(target)
        return target

    @staticmethod
    def _label(target: Target, description: str = "") -> str:
        return description or str(target)

    def _wait_config(self, timeout: Optional[int]) -> WaitConfig:
        return WaitConfig.from_milliseconds(
            timeout or self.default_timeout,
            initial_interval=0.1,
            max_interval=0.5,
        )

    def _act(
        self,
        target: Target,
        condition: str,
        action: Callable[[Locator], Any],
        description: str = "",
        timeout: Optional[int] = None,
    ) -> Any:
        """Retry `action(locator)` until it completes without a Playwright error."""
        label = self._label(target, description)

        def attempt() -> Tuple[bool, Any]:
            return True, action(self._get_locator(target))

        result = poll(
            attempt,
            self._wait_config(timeout),
            description=f"{label} to {condition}",
            retry_on=(PlaywrightError,),
        )
        if not result.ok:
            logger.error(result.failure_message())
            raise ElementAssertionError(
                label,
                condition,
                observed=None,
                timeout_ms=timeout or self.default_timeout,
                last_error=result.last_error,
            )
        return result.value

    def _expect(
        self,
        target: Target,
        condition: str,
        check: Callable[[Locator], Tuple[bool, Any]],
        description: str = "",
        timeout: Optional[int] = None,
    ) -> Any:
        """Poll `check(locator)` until it reports success; returns the observation."""
        label = self._label(target, description)
        result = poll(
            lambda: check(self._get_locator(target)),
            self._wait_config(timeout),
            description=f"{label} to {condition}",
            retry_on=(PlaywrightError,),
        )
        if not result.ok:
            logger.error(result.failure_message())
            raise ElementAssertionError(
                label,
                condition,
                observed=result.value,
                timeout_ms=timeout or self.default_timeout,
                last_error=result.last_error,
            )
        return result.value

    @staticmethod
    def _visible(locator: Locator) -> bool:
        return locator.count() > 0 and locator.first.is_visible()

    # =========================================================================
    # Actions
    # =========================================================================

    def click(
        self,
        target: Target,
        description: str = "",
        timeout: int = None,
        force: bool = False,
        double_click: bool = False,
    ) -> None:
        """
        Click on an element once it is actionable.

        Args:
            target: Selector, LiveQuery or Locator
            description: Human-readable description for reporting
            timeout: Overall timeout in milliseconds
            force: Skip Playwright actionability checks
            double_click: Perform double-click instead of single click
        """
        label = self._label(target, description)
        with allure.step(f"Click: {label}"):
            logger.info(f"Clicking element: {label}")

            def do_click(locator: Locator) -> None:
                if double_click:
                    locator.dblclick(timeout=ATTEMPT_TIMEOUT_MS, force=force)
                else:
                    locator.click(timeout=ATTEMPT_TIMEOUT_MS, force=force)

            self._act(target, "be clickable", do_click, description, timeout)

    def fill(
        self,
        target: Target,
        value: str,
        description: str = "",
        timeout: int = None,
    ) -> None:
        """
        Replace the content of an input field.

        Args:
            target: Selector, LiveQuery or Locator
            value: Text to enter
            description: Human-readable description for reporting
            timeout: Overall timeout in milliseconds
        """
        label = self._label(target, description)
        shown = "*" * len(value) if "password" in label.lower() else value[:50]
        with allure.step(f"Fill {label}: {shown}"):
            logger.info(f"Filling input: {label} with '{shown}'")
            self._act(
                target,
                "accept input",
                lambda locator: locator.fill(value, timeout=ATTEMPT_TIMEOUT_MS),
                description,
                timeout,
            )

    def type_text(
        self,
        target: Target,
        text: str,
        description: str = "",
        delay: int = 0,
        timeout: int = None,
    ) -> None:
        """
        Type text key by key after the existing content.

        Args:
            target: Selector, LiveQuery or Locator
            text: Text to type
            description: Human-readable description for reporting
            delay: Delay between keystrokes in milliseconds
            timeout: Overall timeout in milliseconds
        """
        label = self._label(target, description)
        with allure.step(f"Type into {label}"):
            logger.info(f"Typing into: {label}")
            self._act(
                target,
                "accept typing",
                lambda locator: locator.press_sequentially(
                    text, delay=delay, timeout=ATTEMPT_TIMEOUT_MS
                ),
                description,
                timeout,
            )

    def clear(self, target: Target, description: str = "", timeout: int = None) -> None:
        label = self._label(target, description)
        with allure.step(f"Clear {label}"):
            self._act(
                target,
                "be cleared",
                lambda locator: locator.clear(timeout=ATTEMPT_TIMEOUT_MS),
                description,
                timeout,
            )

    def select_option(
        self,
        target: Target,
        value: Union[str, List[str]],
        description: str = "",
        by: str = "value",
        timeout: int = None,
    ) -> None:
        """
        Select option(s) from a dropdown.

        Args:
            target: Selector, LiveQuery or Locator
            value: Option value(s), label(s) or index
            description: Human-readable description for reporting
            by: Selection method - "value", "label", or "index"
            timeout: Overall timeout in milliseconds
        """
        if by not in ("value", "label", "index"):
            raise ValueError(f"Unknown selection method: {by}")

        label = self._label(target, description)
        with allure.step(f"Select {value} in {label}"):
            logger.info(f"Selecting option: {value} in {label}")
            self._act(
                target,
                f"have option {value!r}",
                lambda locator: locator.select_option(
                    **{by: value}, timeout=ATTEMPT_TIMEOUT_MS
                ),
                description,
                timeout,
            )

    def check(
        self,
        target: Target,
        description: str = "",
        checked: bool = True,
        timeout: int = None,
    ) -> None:
        """Check (or uncheck) a checkbox or radio button."""
        label = self._label(target, description)
        verb = "Check" if checked else "Uncheck"
        with allure.step(f"{verb} {label}"):
            logger.info(f"{verb}ing: {label}")

            def do_check(locator: Locator) -> None:
                if checked:
                    locator.check(timeout=ATTEMPT_TIMEOUT_MS)
                else:
                    locator.uncheck(timeout=ATTEMPT_TIMEOUT_MS)

            self._act(target, f"be {verb.lower()}ed", do_check, description, timeout)

    def hover(self, target: Target, description: str = "", timeout: int = None) -> None:
        label = self._label(target, description)
        with allure.step(f"Hover: {label}"):
            logger.info(f"Hovering over: {label}")
            self._act(
                target,
                "be hoverable",
                lambda locator: locator.hover(timeout=ATTEMPT_TIMEOUT_MS),
                description,
                timeout,
            )

    def upload_file(
        self,
        target: Target,
        file_path: Union[str, List[str]],
        description: str = "",
        timeout: int = None,
    ) -> None:
        """
        Attach file(s) to a file input.

        Args:
            target: File input selector, LiveQuery or Locator
            file_path: Path(s) to file(s) to upload
            description: Human-readable description for reporting
            timeout: Overall timeout in milliseconds
        """
        label = self._label(target, description)
        with allure.step(f"Upload file to {label}"):
            logger.info(f"Uploading {file_path} to: {label}")
            self._act(
                target,
                "accept files",
                lambda locator: locator.set_input_files(
                    file_path, timeout=ATTEMPT_TIMEOUT_MS
                ),
                description,
                timeout,
            )

    def drag_and_drop(
        self,
        source: Target,
        target: Target,
        source_desc: str = "",
        target_desc: str = "",
        timeout: int = None,
    ) -> None:
        """
        Drag an element and drop it onto another element.

        Args:
            source: Source element
            target: Drop target element
            source_desc: Description of source element
            target_desc: Description of target element
            timeout: Overall timeout in milliseconds
        """
        source_label = self._label(source, source_desc)
        target_label = self._label(target, target_desc)
        with allure.step(f"Drag and drop: {source_label} -> {target_label}"):
            logger.info(f"Dragging from {source_label} to {target_label}")
            self._act(
                source,
                f"be dropped on {target_label}",
                lambda locator: locator.drag_to(
                    self._get_locator(target), timeout=ATTEMPT_TIMEOUT_MS
                ),
                source_desc,
                timeout,
            )

    def press_key(
        self,
        key: str,
        target: Optional[Target] = None,
        description: str = "",
        timeout: int = None,
    ) -> None:
        """
        Press a keyboard key, optionally on a specific element.

        Args:
            key: Key to press (e.g., "Enter", "Tab", "Escape")
            target: Optional element receiving the key press
            description: Human-readable description for reporting
            timeout: Overall timeout in milliseconds
        """
        with allure.step(f"Press key: {key}"):
            if target is None:
                self.page.keyboard.press(key)
            else:
                self._act(
                    target,
                    f"receive {key}",
                    lambda locator: locator.press(key, timeout=ATTEMPT_TIMEOUT_MS),
                    description,
                    timeout,
                )
            logger.debug(f"Pressed key: {key}")

    def trigger(
        self,
        target: Target,
        event: str,
        description: str = "",
        timeout: int = None,
    ) -> None:
        """Dispatch a synthetic DOM event on the element."""
        label = self._label(target, description)
        with allure.step(f"Trigger {event} on {label}"):
            self._act(
                target,
                f"receive {event}",
                lambda locator: locator.dispatch_event(event, timeout=ATTEMPT_TIMEOUT_MS),
                description,
                timeout,
            )

    def scroll_into_view(self, target: Target, description: str = "", timeout: int = None) -> None:
        self._act(
            target,
            "scroll into view",
            lambda locator: locator.first.scroll_into_view_if_needed(
                timeout=ATTEMPT_TIMEOUT_MS
            ),
            description,
            timeout,
        )

    # =========================================================================
    # Getters
    # =========================================================================

    def text_of(self, target: Target, description: str = "", timeout: int = None) -> str:
        """Stripped inner text of a visible element."""

        def check(locator: Locator) -> Tuple[bool, Optional[str]]:
            if not self._visible(locator):
                return False, None
            return True, locator.first.inner_text(timeout=ATTEMPT_TIMEOUT_MS).strip()

        text = self._expect(target, "be visible", check, description, timeout)
        logger.debug(f"Got text from {self._label(target, description)}: '{text}'")
        return text

    def texts_of(self, target: Target, description: str = "", timeout: int = None) -> List[str]:
        """Stripped inner text of every match once at least one exists."""

        def check(locator: Locator) -> Tuple[bool, List[str]]:
            texts = [text.strip() for text in locator.all_inner_texts()]
            return len(texts) > 0, texts

        return self._expect(target, "exist", check, description, timeout)

    def count_of(self, target: Target) -> int:
        """Current number of matches, without waiting."""
        return self._get_locator(target).count()

    def attribute_of(
        self,
        target: Target,
        attribute: str,
        description: str = "",
        timeout: int = None,
    ) -> Optional[str]:
        """Attribute value of the first match once it exists."""

        def check(locator: Locator) -> Tuple[bool, Optional[str]]:
            if locator.count() == 0:
                return False, None
            return True, locator.first.get_attribute(attribute, timeout=ATTEMPT_TIMEOUT_MS)

        return self._expect(target, "exist", check, description, timeout)

    def value_of(self, target: Target, description: str = "", timeout: int = None) -> str:
        """Current value of an input element."""

        def check(locator: Locator) -> Tuple[bool, Optional[str]]:
            if locator.count() == 0:
                return False, None
            return True, locator.first.input_value(timeout=ATTEMPT_TIMEOUT_MS)

        return self._expect(target, "exist", check, description, timeout)

    def is_visible(self, target: Target) -> bool:
        """Instant visibility check; never waits and never raises for absence."""
        try:
            return self._visible(self._get_locator(target))
        except PlaywrightError:
            return False

    # =========================================================================
    # Assertions
    # =========================================================================

    def expect_visible(self, target: Target, description: str = "", timeout: int = None) -> None:
        label = self._label(target, description)
        with allure.step(f"Expect visible: {label}"):
            self._expect(
                target,
                "be visible",
                lambda locator: (self._visible(locator), f"{locator.count()} match(es)"),
                description,
                timeout,
            )

    def expect_hidden(self, target: Target, description: str = "", timeout: int = None) -> None:
        label = self._label(target, description)
        with allure.step(f"Expect hidden: {label}"):
            self._expect(
                target,
                "be hidden",
                lambda locator: (not self._visible(locator), f"{locator.count()} match(es)"),
                description,
                timeout,
            )

    def expect_count(
        self,
        target: Target,
        expected: int,
        description: str = "",
        timeout: int = None,
    ) -> int:
        """Wait until exactly `expected` elements match."""
        label = self._label(target, description)
        with allure.step(f"Expect {expected} x {label}"):

            def check(locator: Locator) -> Tuple[bool, int]:
                count = locator.count()
                return count == expected, count

            return self._expect(target, f"match {expected} element(s)", check, description, timeout)

    def expect_count_greater_than(
        self,
        target: Target,
        minimum: int,
        description: str = "",
        timeout: int = None,
    ) -> int:
        """Wait until more than `minimum` elements match."""
        label = self._label(target, description)
        with allure.step(f"Expect more than {minimum} x {label}"):

            def check(locator: Locator) -> Tuple[bool, int]:
                count = locator.count()
                return count > minimum, count

            return self._expect(
                target, f"match more than {minimum} element(s)", check, description, timeout
            )

    def expect_contains_text(
        self,
        target: Target,
        text: str,
        description: str = "",
        timeout: int = None,
        ignore_case: bool = False,
    ) -> None:
        """Wait until the combined text of the matches contains `text`."""
        label = self._label(target, description)
        with allure.step(f"Expect {label} to contain '{text}'"):

            def check(locator: Locator) -> Tuple[bool, str]:
                combined = " ".join(locator.all_inner_texts())
                if ignore_case:
                    return text.lower() in combined.lower(), combined
                return text in combined, combined

            self._expect(target, f"contain text {text!r}", check, description, timeout)

    def expect_attribute(
        self,
        target: Target,
        attribute: str,
        value: str,
        description: str = "",
        timeout: int = None,
    ) -> None:
        label = self._label(target, description)
        with allure.step(f"Expect {label} [{attribute}={value}]"):

            def check(locator: Locator) -> Tuple[bool, Optional[str]]:
                if locator.count() == 0:
                    return False, None
                actual = locator.first.get_attribute(attribute, timeout=ATTEMPT_TIMEOUT_MS)
                return actual == value, actual

            self._expect(
                target, f"have {attribute}={value!r}", check, description, timeout
            )

    def expect_value(
        self,
        target: Target,
        value: str,
        description: str = "",
        timeout: int = None,
    ) -> None:
        label = self._label(target, description)
        with allure.step(f"Expect {label} value '{value}'"):

            def check(locator: Locator) -> Tuple[bool, Optional[str]]:
                if locator.count() == 0:
                    return False, None
                actual = locator.first.input_value(timeout=ATTEMPT_TIMEOUT_MS)
                return actual == value, actual

            self._expect(target, f"have value {value!r}", check, description, timeout)

    def expect_url_contains(
        self, fragment: str, description: str = "", timeout: int = None
    ) -> str:
        """Wait until the page URL contains `fragment`; returns the URL."""
        return self._expect_url(fragment, True, description, timeout)

    def expect_url_not_contains(
        self, fragment: str, description: str = "", timeout: int = None
    ) -> str:
        """Wait until the page URL no longer contains `fragment`; returns the URL."""
        return self._expect_url(fragment, False, description, timeout)

    def _expect_url(
        self,
        fragment: str,
        present: bool,
        description: str,
        timeout: Optional[int],
    ) -> str:
        condition = f"{'contain' if present else 'not contain'} {fragment!r}"
        with allure.step(f"Expect URL to {condition}"):
            result = poll(
                lambda: ((fragment in self.page.url) == present, self.page.url),
                self._wait_config(timeout),
                description=f"URL to {condition}",
            )
            if not result.ok:
                logger.error(result.failure_message())
                raise ElementAssertionError(
                    f"page URL after {description}" if description else "page URL",
                    condition,
                    observed=result.value,
                    timeout_ms=timeout or self.default_timeout,
                )
            return result.value


__all__ = [
    "ATTEMPT_TIMEOUT_MS",
    "ElementActions",
    "ElementAssertionError",
    "Target",
]
