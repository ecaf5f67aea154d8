"""
================================================================================
Wait Conditions
================================================================================

Predicates over browser state, polled by the `Waiter`.

Every condition evaluates to ``(satisfied, value)`` using read-only driver
primitives. The value is what a successful wait hands back to the caller:
the element handle, the page title, the dialog text, ...

Conditions:
    ElementPresent(locator)
    ElementVisible(locator)
    ElementEnabled(locator)
    ElementAbsent(locator)
    TitleContains(text)
    AlertPresent()
    AnyOf(conditions)        first satisfied member wins, value = (index, value)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from .driver import BrowserDriver
from .locator import Locator


@dataclass(frozen=True)
class Deadline:
    """
    Bound on a wait.

    Attributes:
        timeout_ms: Total time the wait may take
        poll_interval_ms: Delay between two evaluations
    """

    timeout_ms: int
    poll_interval_ms: int = 100

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be > 0, got {self.timeout_ms}")
        if self.poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be > 0, got {self.poll_interval_ms}")
        if self.poll_interval_ms > self.timeout_ms:
            raise ValueError(
                f"poll_interval_ms ({self.poll_interval_ms}) must not exceed "
                f"timeout_ms ({self.timeout_ms})"
            )

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000

    @property
    def poll_interval_s(self) -> float:
        return self.poll_interval_ms / 1000


class WaitCondition:
    """Base class for conditions. Subclasses are frozen dataclasses."""

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class ElementPresent(WaitCondition):
    locator: Locator

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        handle = await driver.locate(self.locator)
        return handle is not None, handle

    def describe(self) -> str:
        return f"ElementPresent({self.locator})"


@dataclass(frozen=True)
class ElementVisible(WaitCondition):
    locator: Locator

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        handle = await driver.locate(self.locator)
        if handle is None:
            return False, None
        return await driver.is_visible(handle), handle

    def describe(self) -> str:
        return f"ElementVisible({self.locator})"


@dataclass(frozen=True)
class ElementEnabled(WaitCondition):
    locator: Locator

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        handle = await driver.locate(self.locator)
        if handle is None:
            return False, None
        return await driver.is_enabled(handle), handle

    def describe(self) -> str:
        return f"ElementEnabled({self.locator})"


@dataclass(frozen=True)
class ElementAbsent(WaitCondition):
    locator: Locator

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        handle = await driver.locate(self.locator)
        return handle is None, None

    def describe(self) -> str:
        return f"ElementAbsent({self.locator})"


@dataclass(frozen=True)
class TitleContains(WaitCondition):
    text: str

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        title = await driver.current_title()
        return self.text in (title or ""), title

    def describe(self) -> str:
        return f"TitleContains({self.text!r})"


@dataclass(frozen=True)
class AlertPresent(WaitCondition):

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        text = await driver.alert_text()
        return text is not None, text

    def describe(self) -> str:
        return "AlertPresent()"


@dataclass(frozen=True)
class AnyOf(WaitCondition):
    """Satisfied as soon as one member is; members are checked in order."""

    conditions: Tuple[WaitCondition, ...]

    def __post_init__(self) -> None:
        if not self.conditions:
            raise ValueError("AnyOf needs at least one condition")

    async def evaluate(self, driver: BrowserDriver) -> Tuple[bool, Any]:
        for index, condition in enumerate(self.conditions):
            satisfied, value = await condition.evaluate(driver)
            if satisfied:
                return True, (index, value)
        return False, None

    def describe(self) -> str:
        return "AnyOf(" + ", ".join(c.describe() for c in self.conditions) + ")"


__all__ = [
    "AlertPresent",
    "AnyOf",
    "Deadline",
    "ElementAbsent",
    "ElementEnabled",
    "ElementPresent",
    "ElementVisible",
    "TitleContains",
    "WaitCondition",
]
