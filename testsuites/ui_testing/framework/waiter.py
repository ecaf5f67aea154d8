# ================================================================================
# Waiter Module
# ================================================================================
#
# Polls a WaitCondition against the browser until it holds or the deadline
# elapses.
#
# Key Features:
#   - Single parameterized polling loop for every condition kind
#   - Cooperative suspension (asyncio.sleep) between polls
#   - Timeout is a result value, never an exception
#   - "Not found yet" driver errors are absorbed into further polls
#   - Session loss short-circuits as a transient error
#
# Usage:
#   waiter = Waiter(driver, default_deadline=Deadline(10000, 100))
#   result = await waiter.wait(ElementVisible(Locator.by_id("login-button")))
#   if result.ok:
#       handle = result.value
#
# ================================================================================

import asyncio
import time
from typing import Optional

from loguru import logger

from .conditions import Deadline, WaitCondition
from .driver import BrowserDriver
from .results import InteractionResult, SessionLostError


class Waiter:
    """
    Condition poller bound to one browser session.

    The last evaluation happens at the deadline itself, so a `Timeout` is
    never reported before ``timeout_ms`` and at most one poll interval after.
    """

    def __init__(self, driver: BrowserDriver, default_deadline: Optional[Deadline] = None):
        """
        Args:
            driver: Browser primitives for the session
            default_deadline: Used when `wait` is called without a deadline
        """
        self.driver = driver
        self.default_deadline = default_deadline or Deadline(timeout_ms=10000, poll_interval_ms=100)

    async def wait(
        self,
        condition: WaitCondition,
        deadline: Optional[Deadline] = None,
    ) -> InteractionResult:
        """
        Wait for `condition` to hold.

        Args:
            condition: Condition to poll
            deadline: Timeout/poll interval; defaults to the waiter's default

        Returns:
            SUCCESS with the condition value, TIMEOUT when the deadline
            elapsed, TRANSIENT_ERROR when the session was lost.
        """
        deadline = deadline or self.default_deadline
        start_time = time.monotonic()
        attempt = 0
        last_error: Optional[Exception] = None

        while True:
            attempt += 1
            try:
                satisfied, value = await condition.evaluate(self.driver)
            except SessionLostError as e:
                elapsed_ms = (time.monotonic() - start_time) * 1000
                logger.error(f"Session lost while waiting for {condition.describe()}: {e}")
                return InteractionResult.transient(
                    e, condition=condition, elapsed_ms=elapsed_ms
                )
            except Exception as e:
                satisfied, value = False, None
                last_error = e
                logger.debug(
                    f"Poll {attempt} for {condition.describe()} raised "
                    f"{type(e).__name__}: {e}"
                )

            elapsed_ms = (time.monotonic() - start_time) * 1000

            if satisfied:
                logger.debug(
                    f"{condition.describe()} satisfied after {attempt} polls "
                    f"({elapsed_ms:.0f}ms)"
                )
                return InteractionResult.success(
                    value, condition=condition, elapsed_ms=elapsed_ms
                )

            remaining_ms = deadline.timeout_ms - elapsed_ms
            if remaining_ms <= 0:
                logger.debug(
                    f"Timeout after {elapsed_ms:.0f}ms ({attempt} polls) waiting for "
                    f"{condition.describe()}"
                )
                return InteractionResult.timeout(
                    cause=last_error, condition=condition, elapsed_ms=elapsed_ms
                )

            await asyncio.sleep(min(deadline.poll_interval_ms, remaining_ms) / 1000)


__all__ = [
    "Waiter",
]
