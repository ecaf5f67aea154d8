# ================================================================================
# Element Actions Module
# ================================================================================
#
# Performs a single interaction (click, type, read text, clear) against a
# located element, with pre-condition waits and optional post-condition
# confirmation.
#
# Key Features:
#   - Presence / visibility / enabled pre-checks through the Waiter
#   - Post-condition confirmation for state-changing clicks
#   - One re-resolve of the locator when the element went stale
#   - Dispatch failures normalized into InteractionResult values
#   - Allure step integration
#
# ================================================================================

import time
from typing import Any, Optional

import allure
from loguru import logger

from .conditions import (
    Deadline,
    ElementEnabled,
    ElementPresent,
    ElementVisible,
    WaitCondition,
)
from .driver import Action, ActionKind, BrowserDriver
from .locator import Locator
from .results import InteractionResult, ResultKind, StaleElementError
from .waiter import Waiter


class ActionExecutor:
    """
    Interaction executor for one browser session.

    Sequence for every call:
        1. wait for the element to be present (timeout -> NOT_FOUND)
        2. mutating actions: wait visible; clicks: wait enabled (timeout -> TIMEOUT)
        3. dispatch the action (stale element -> re-resolve once)
        4. wait for the caller's post-condition, if any (timeout -> TIMEOUT)

    A TIMEOUT from step 4 means "dispatched but effect unconfirmed" and must
    be treated as a failure by the caller.

    Example:
        actions = ActionExecutor(driver, waiter)
        result = await actions.perform(
            add_button, Action.click(), post_condition=ElementPresent(remove_button)
        )
    """

    def __init__(self, driver: BrowserDriver, waiter: Waiter):
        """
        Args:
            driver: Browser primitives for the session
            waiter: Waiter bound to the same driver
        """
        self.driver = driver
        self.waiter = waiter

    async def perform(
        self,
        locator: Locator,
        action: Action,
        deadline: Optional[Deadline] = None,
        post_condition: Optional[WaitCondition] = None,
    ) -> InteractionResult:
        """
        Perform `action` on the element found by `locator`.

        Args:
            locator: Element to act on
            action: Interaction to dispatch
            deadline: Bound for each wait stage; waiter default when omitted
            post_condition: Condition confirming the action took effect

        Returns:
            SUCCESS (value is the text for READ_TEXT), NOT_FOUND, TIMEOUT or
            TRANSIENT_ERROR, carrying the locator and elapsed time.
        """
        with allure.step(f"{action} on {locator}"):
            return await self._perform(locator, action, deadline, post_condition)

    async def _perform(
        self,
        locator: Locator,
        action: Action,
        deadline: Optional[Deadline],
        post_condition: Optional[WaitCondition],
    ) -> InteractionResult:
        deadline = deadline or self.waiter.default_deadline
        start_time = time.monotonic()

        def elapsed() -> float:
            return (time.monotonic() - start_time) * 1000

        logger.info(f"{action} -> {locator}")

        resolved = await self._resolve(locator, action, deadline)
        if not resolved.ok:
            return self._with_context(resolved, locator, elapsed())

        try:
            value = await self._dispatch(resolved.value, action)
        except StaleElementError:
            logger.warning(f"Element went stale before {action}: {locator}. Re-resolving once.")
            resolved = await self._resolve(locator, action, deadline)
            if not resolved.ok:
                return self._with_context(resolved, locator, elapsed())
            try:
                value = await self._dispatch(resolved.value, action)
            except Exception as retry_error:
                logger.error(f"{action} failed again on {locator}: {retry_error}")
                return InteractionResult.transient(
                    retry_error, locator=locator, elapsed_ms=elapsed()
                )
        except Exception as e:
            logger.error(f"{action} failed on {locator}: {e}")
            return InteractionResult.transient(e, locator=locator, elapsed_ms=elapsed())

        if post_condition is not None:
            confirmation = await self.waiter.wait(post_condition, deadline)
            if not confirmation.ok:
                logger.error(
                    f"{action} on {locator} dispatched but not confirmed: "
                    f"{confirmation.describe()}"
                )
                kind = (
                    ResultKind.TRANSIENT_ERROR
                    if confirmation.kind is ResultKind.TRANSIENT_ERROR
                    else ResultKind.TIMEOUT
                )
                return InteractionResult(
                    kind,
                    cause=confirmation.cause,
                    locator=locator,
                    condition=post_condition,
                    elapsed_ms=elapsed(),
                )

        logger.debug(f"Done: {action} -> {locator} ({elapsed():.0f}ms)")
        return InteractionResult.success(value, locator=locator, elapsed_ms=elapsed())

    async def _resolve(
        self,
        locator: Locator,
        action: Action,
        deadline: Deadline,
    ) -> InteractionResult:
        """Run the pre-condition waits; SUCCESS carries the element handle."""
        present = await self.waiter.wait(ElementPresent(locator), deadline)
        if present.kind is ResultKind.TIMEOUT:
            return InteractionResult.not_found(
                cause=present.cause, condition=present.condition
            )
        if not present.ok or not action.mutating:
            return present

        result = await self.waiter.wait(ElementVisible(locator), deadline)
        if result.ok and action.kind is ActionKind.CLICK:
            result = await self.waiter.wait(ElementEnabled(locator), deadline)
        return result

    async def _dispatch(self, handle: Any, action: Action) -> Any:
        value = await self.driver.act(handle, action)
        if action.kind is ActionKind.READ_TEXT:
            return value if isinstance(value, str) else str(value or "")
        return value

    @staticmethod
    def _with_context(result: InteractionResult, locator: Locator, elapsed_ms: float) -> InteractionResult:
        return InteractionResult(
            result.kind,
            value=result.value,
            cause=result.cause,
            locator=locator,
            condition=result.condition,
            elapsed_ms=elapsed_ms,
        )


__all__ = [
    "ActionExecutor",
]
