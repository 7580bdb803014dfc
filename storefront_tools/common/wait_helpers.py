# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Retry-until-timeout primitives shared by UI actions, UI assertions and the
# HTTP client. Every suspension point in the harness goes through `poll()`.
#
# Key Features:
#   - Explicit PollResult instead of hidden exceptions
#   - Constant or exponential intervals with optional jitter
#   - Named scenarios matching the harness timeouts
#
# Usage:
#   result = poll(lambda: (locator.count() > 0, locator.count()), config)
#   count = result.unwrap()
#
# ================================================================================

import random
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, Tuple, Type, TypeVar

from loguru import logger


T = TypeVar("T")


@dataclass
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        initial_interval: Initial wait interval in seconds
        multiplier: Multiplier applied to the interval after each attempt
        max_interval: Maximum interval between attempts
        timeout: Total timeout in seconds
        jitter: Add random jitter to the interval
    """
    initial_interval: float = 0.1
    multiplier: float = 1.0
    max_interval: float = 1.0
    timeout: float = 10.0
    jitter: bool = False

    @classmethod
    def from_milliseconds(cls, timeout_ms: int, **overrides) -> "WaitConfig":
        """Build a config from a millisecond timeout (Playwright convention)."""
        return cls(timeout=timeout_ms / 1000.0, **overrides)


# Pre-configured wait strategies for the harness timeouts
WAIT_SCENARIOS: Dict[str, WaitConfig] = {
    "default": WaitConfig(),
    # Element interactions and DOM assertions
    "command": WaitConfig(initial_interval=0.1, max_interval=0.5, timeout=10.0),
    # Navigation and initial load gate
    "page_load": WaitConfig(initial_interval=0.25, max_interval=1.0, timeout=30.0),
    # Transport-level retries of HTTP calls
    "request": WaitConfig(
        initial_interval=0.5,
        multiplier=2.0,
        max_interval=5.0,
        timeout=10.0,
        jitter=True,
    ),
}


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""
    pass


@dataclass
class PollResult(Generic[T]):
    """
    Outcome of a poll: either the value that satisfied the predicate or a
    timeout carrying the last observation.
    """
    ok: bool
    value: Optional[T]
    attempts: int
    elapsed: float
    description: str = ""
    last_error: Optional[BaseException] = None

    def unwrap(self) -> T:
        """Return the value or raise WaitTimeoutError."""
        if self.ok:
            return self.value
        raise WaitTimeoutError(self.failure_message())

    def failure_message(self) -> str:
        message = (
            f"Timeout after {self.elapsed:.1f}s ({self.attempts} attempts) "
            f"waiting for: {self.description}. Last result: {self.value!r}"
        )
        if self.last_error is not None:
            message += f", last error: {self.last_error}"
        return message


def get_wait_config(scenario: str) -> WaitConfig:
    """
    Get wait configuration for a specific scenario.

    Args:
        scenario: Scenario name (e.g., "command", "page_load")

    Returns:
        WaitConfig for the scenario, or default if not found
    """
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


def calculate_next_interval(
    current_interval: float,
    config: WaitConfig
) -> float:
    """
    Calculate the next wait interval with backoff and jitter.

    Args:
        current_interval: Current interval in seconds
        config: Wait configuration

    Returns:
        Next interval in seconds
    """
    next_interval = min(
        current_interval * config.multiplier,
        config.max_interval
    )

    if config.jitter:
        # Add +/- 25% jitter
        jitter_factor = 0.75 + (random.random() * 0.5)
        next_interval = next_interval * jitter_factor

    return next_interval


def poll(
    check_fn: Callable[[], Tuple[bool, T]],
    config: Optional[WaitConfig] = None,
    description: str = "condition",
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> PollResult[T]:
    """
    Evaluate `check_fn` until it reports success or the timeout elapses.

    The check is always attempted at least once. Exceptions listed in
    `retry_on` count as a failed attempt; anything else propagates.

    Args:
        check_fn: Function returning (success, observed_value)
        config: Wait configuration (defaults to the "default" scenario)
        description: Human-readable condition for logs and failures
        retry_on: Exception types treated as "not yet"

    Returns:
        PollResult describing success or timeout
    """
    config = config or get_wait_config("default")
    start_time = time.monotonic()
    interval = config.initial_interval
    attempts = 0
    last_value: Optional[T] = None
    last_error: Optional[BaseException] = None

    while True:
        attempts += 1
        try:
            success, last_value = check_fn()
            if success:
                elapsed = time.monotonic() - start_time
                if attempts > 1:
                    logger.debug(
                        f"Condition met after {attempts} attempts "
                        f"({elapsed:.2f}s): {description}"
                    )
                return PollResult(True, last_value, attempts, elapsed, description)
        except retry_on as e:
            last_error = e

        elapsed = time.monotonic() - start_time
        remaining = config.timeout - elapsed
        if remaining <= 0:
            result = PollResult(
                False, last_value, attempts, elapsed, description, last_error
            )
            logger.debug(result.failure_message())
            return result

        time.sleep(min(interval, remaining))
        interval = calculate_next_interval(interval, config)


def retry_until(
    action: Callable[[], T],
    config: Optional[WaitConfig] = None,
    description: str = "action",
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> PollResult[T]:
    """
    Repeat an action until it completes without raising a `retry_on` error.

    This is `poll` for side-effecting operations: the action's return value
    becomes the PollResult value.
    """
    def attempt() -> Tuple[bool, T]:
        return True, action()

    return poll(attempt, config, description, retry_on=retry_on)


__all__ = [
    "WaitConfig",
    "WaitTimeoutError",
    "PollResult",
    "WAIT_SCENARIOS",
    "get_wait_config",
    "calculate_next_interval",
    "poll",
    "retry_until",
]
