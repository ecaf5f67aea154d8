"""
================================================================================
Browser Driver
================================================================================

The narrow set of browser primitives the interaction core consumes, and the
Playwright implementation of them.

Primitives:
    - locate(locator)        -> element handle or None
    - locate_all(locator)    -> every matching element handle
    - is_visible(handle)     -> bool
    - is_enabled(handle)     -> bool
    - act(handle, action)    -> action result (text for READ_TEXT)
    - current_title()        -> str
    - take_screenshot()      -> PNG bytes
    - alert_text()           -> text of a pending dialog or None
    - accept_alert()         -> accept the pending dialog
    - navigate(url)

Implementations raise `SessionLostError` when the session is gone and
`StaleElementError` when a handle was detached; anything else is left to the
caller to classify.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import abc
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, List, NoReturn, Optional

from loguru import logger
from playwright.async_api import Dialog, ElementHandle, Page
from playwright.async_api import Error as PlaywrightError

from .locator import Locator
from .results import SessionLostError, StaleElementError


class ActionKind(str, Enum):
    """Interaction kinds the executor can dispatch."""

    CLICK = "click"
    TYPE = "type"
    READ_TEXT = "read_text"
    CLEAR = "clear"


@dataclass(frozen=True)
class Action:
    """A single interaction, with its text payload for TYPE."""

    kind: ActionKind
    text: Optional[str] = None

    @classmethod
    def click(cls) -> "Action":
        return cls(ActionKind.CLICK)

    @classmethod
    def type_text(cls, text: str) -> "Action":
        return cls(ActionKind.TYPE, text)

    @classmethod
    def read_text(cls) -> "Action":
        return cls(ActionKind.READ_TEXT)

    @classmethod
    def clear(cls) -> "Action":
        return cls(ActionKind.CLEAR)

    @property
    def mutating(self) -> bool:
        return self.kind is not ActionKind.READ_TEXT

    def __str__(self) -> str:
        if self.kind is ActionKind.TYPE:
            return f"type({len(self.text or '')} chars)"
        return self.kind.value


class BrowserDriver(abc.ABC):
    """
    Browser primitives consumed by the waiter, executor and dismisser.

    A JavaScript dialog opened by an action blocks that action until the
    dialog is handled. `_dispatch_until_dialog` returns control as soon as a
    dialog opens; the blocked action is collected by `_settle_blocked_actions`
    once the dialog has been accepted.
    """

    def __init__(self) -> None:
        self._dialog_signal: Optional[asyncio.Future] = None
        self._blocked_actions: List[asyncio.Task] = []

    @property
    def pending_actions(self) -> int:
        """Actions still held up by a dialog."""
        return sum(1 for task in self._blocked_actions if not task.done())

    def _notify_dialog(self) -> None:
        if self._dialog_signal is not None and not self._dialog_signal.done():
            self._dialog_signal.set_result(None)

    async def _dispatch_until_dialog(self, dispatch: Awaitable[Any]) -> Any:
        """Run `dispatch`, returning early with None if a dialog opens first."""
        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(dispatch)
        signal = loop.create_future()
        self._dialog_signal = signal
        try:
            await asyncio.wait({task, signal}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            self._dialog_signal = None
            signal.cancel()

        if task.done():
            return task.result()
        logger.debug("Dialog opened during the action; it completes once the dialog is accepted")
        self._blocked_actions.append(task)
        return None

    async def _settle_blocked_actions(self, timeout_ms: int) -> None:
        """Wait for actions released by an accepted dialog and log how they ended."""
        tasks, self._blocked_actions = self._blocked_actions, []
        if not tasks:
            return
        done, pending = await asyncio.wait(tasks, timeout=timeout_ms / 1000)
        for task in done:
            if task.cancelled():
                continue
            error = task.exception()
            if error is not None:
                logger.warning(f"Action held up by a dialog failed after it was accepted: {error}")
        self._blocked_actions.extend(pending)

    @abc.abstractmethod
    async def locate(self, locator: Locator) -> Optional[Any]:
        """Return a handle for the first element matching `locator`, or None."""

    @abc.abstractmethod
    async def locate_all(self, locator: Locator) -> List[Any]:
        """Return handles for every element matching `locator`, in document order."""

    @abc.abstractmethod
    async def is_visible(self, handle: Any) -> bool:
        ...

    @abc.abstractmethod
    async def is_enabled(self, handle: Any) -> bool:
        ...

    @abc.abstractmethod
    async def act(self, handle: Any, action: Action) -> Any:
        """Perform `action` on `handle`. READ_TEXT returns the element text."""

    @abc.abstractmethod
    async def current_title(self) -> str:
        ...

    @abc.abstractmethod
    async def take_screenshot(self) -> bytes:
        ...

    @abc.abstractmethod
    async def alert_text(self) -> Optional[str]:
        """Text of a pending JavaScript dialog, or None when there is none."""

    @abc.abstractmethod
    async def accept_alert(self) -> None:
        ...

    @abc.abstractmethod
    async def navigate(self, url: str) -> None:
        ...


# Playwright error messages that mean the page/context/browser is gone
_SESSION_LOST_MARKERS = (
    "has been closed",
    "target closed",
    "browser has disconnected",
    "connection closed",
)

# ... and the ones that mean the element handle went stale
_STALE_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "element handle is disposed",
)


class PlaywrightDriver(BrowserDriver):
    """
    `BrowserDriver` over an async Playwright `Page`.

    Dialogs (alert/confirm/prompt) are queued as they open instead of being
    auto-dismissed by Playwright, so the interstitial dismisser can detect and
    accept them. An action that opened one returns as soon as it is queued.

    Usage:
        page = await manager.new_page()
        driver = PlaywrightDriver(page, implicit_wait_ms=5000)
        handle = await driver.locate(Locator.by_id("login-button"))
    """

    def __init__(self, page: Page, implicit_wait_ms: int = 5000):
        """
        Args:
            page: Playwright Page owned by one test case
            implicit_wait_ms: Default timeout for raw Playwright calls
        """
        super().__init__()
        self.page = page
        self.implicit_wait_ms = implicit_wait_ms
        self.page.set_default_timeout(implicit_wait_ms)
        self._dialogs: List[Dialog] = []
        self.page.on("dialog", self._on_dialog)

    def _on_dialog(self, dialog: Dialog) -> None:
        logger.debug(f"Dialog opened ({dialog.type}): {dialog.message}")
        self._dialogs.append(dialog)
        self._notify_dialog()

    def _raise_translated(self, exc: PlaywrightError) -> NoReturn:
        """Re-raise a Playwright error as SessionLostError / StaleElementError where it is one."""
        message = str(exc).lower()
        if self.page.is_closed() or any(m in message for m in _SESSION_LOST_MARKERS):
            raise SessionLostError(str(exc)) from exc
        if any(m in message for m in _STALE_MARKERS):
            raise StaleElementError(str(exc)) from exc
        raise exc

    def _ensure_open(self) -> None:
        if self.page.is_closed():
            raise SessionLostError("Page has been closed")

    async def locate(self, locator: Locator) -> Optional[ElementHandle]:
        self._ensure_open()
        try:
            return await self.page.query_selector(locator.selector)
        except PlaywrightError as exc:
            self._raise_translated(exc)

    async def locate_all(self, locator: Locator) -> List[ElementHandle]:
        self._ensure_open()
        try:
            return await self.page.query_selector_all(locator.selector)
        except PlaywrightError as exc:
            self._raise_translated(exc)

    async def is_visible(self, handle: ElementHandle) -> bool:
        try:
            return await handle.is_visible()
        except PlaywrightError as exc:
            self._raise_translated(exc)

    async def is_enabled(self, handle: ElementHandle) -> bool:
        try:
            return await handle.is_enabled()
        except PlaywrightError as exc:
            self._raise_translated(exc)

    async def act(self, handle: ElementHandle, action: Action) -> Any:
        self._ensure_open()
        return await self._dispatch_until_dialog(self._act(handle, action))

    async def _act(self, handle: ElementHandle, action: Action) -> Any:
        try:
            if action.kind is ActionKind.CLICK:
                await handle.click()
            elif action.kind is ActionKind.TYPE:
                await handle.fill(action.text or "")
            elif action.kind is ActionKind.CLEAR:
                await handle.fill("")
            elif action.kind is ActionKind.READ_TEXT:
                return await handle.inner_text()
            else:
                raise ValueError(f"Unknown action: {action.kind}")
        except PlaywrightError as exc:
            self._raise_translated(exc)
        return None

    async def current_title(self) -> str:
        self._ensure_open()
        try:
            return await self.page.title()
        except PlaywrightError as exc:
            self._raise_translated(exc)

    async def take_screenshot(self) -> bytes:
        self._ensure_open()
        try:
            return await self.page.screenshot(full_page=True)
        except PlaywrightError as exc:
            self._raise_translated(exc)

    async def alert_text(self) -> Optional[str]:
        self._ensure_open()
        if not self._dialogs:
            return None
        return self._dialogs[0].message

    async def accept_alert(self) -> None:
        self._ensure_open()
        if not self._dialogs:
            raise LookupError("No dialog is open")
        dialog = self._dialogs.pop(0)
        try:
            await dialog.accept()
        except PlaywrightError as exc:
            self._raise_translated(exc)
        if not self._dialogs:
            await self._settle_blocked_actions(self.implicit_wait_ms)

    async def navigate(self, url: str) -> None:
        self._ensure_open()
        try:
            await self.page.goto(url, wait_until="domcontentloaded")
        except PlaywrightError as exc:
            self._raise_translated(exc)
        logger.debug(f"Navigated to: {url}")


__all__ = [
    "Action",
    "ActionKind",
    "BrowserDriver",
    "PlaywrightDriver",
]
