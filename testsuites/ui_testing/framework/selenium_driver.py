"""
================================================================================
Selenium Driver
================================================================================

`BrowserDriver` over a Selenium Chrome WebDriver, for running the same page
objects on the WebDriver protocol instead of Playwright.

Selenium calls are blocking, so each one runs in a worker thread and the
event loop stays free for the waiter's polling. Chrome is started with the
password manager switched off and with unexpected prompts left open, so
alerts reach the interstitial dismisser instead of being auto-dismissed.

Usage:
    driver = await start_selenium_driver(settings)
    try:
        await LoginPage(driver, settings).open()
    finally:
        await driver.quit()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from loguru import logger
from selenium import webdriver
from selenium.common.exceptions import (
    InvalidSessionIdException,
    NoAlertPresentException,
    NoSuchWindowException,
    StaleElementReferenceException,
    WebDriverException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from .driver import Action, ActionKind, BrowserDriver
from .locator import Locator, LocatorStrategy
from .results import SessionLostError, StaleElementError
from .settings import UiSettings


_BY = {
    LocatorStrategy.ID: By.ID,
    LocatorStrategy.CSS: By.CSS_SELECTOR,
    LocatorStrategy.XPATH: By.XPATH,
}

# WebDriver error messages that mean the browser session is gone
_SESSION_LOST_MARKERS = (
    "invalid session id",
    "no such window",
    "chrome not reachable",
    "disconnected",
    "target window already closed",
)

# Keep Chrome's credential service and password manager UI out of the way
CHROME_PREFS = {
    "credentials_enable_service": False,
    "profile.password_manager_enabled": False,
}


def chrome_options(settings: UiSettings) -> webdriver.ChromeOptions:
    """Chrome options for a run: headless flags, noise reduction, prompts left open."""
    options = webdriver.ChromeOptions()
    if settings.headless:
        for arg in ("--headless=new", "--disable-gpu", "--no-sandbox",
                    "--disable-dev-shm-usage", "--window-size=1400,900"):
            options.add_argument(arg)
    else:
        options.add_argument("--start-maximized")

    for arg in (
        "--disable-infobars",
        "--disable-extensions",
        "--disable-popup-blocking",
        "--disable-notifications",
        "--disable-save-password-bubble",
        "--disable-password-manager-reauthentication",
        "--disable-features=PasswordManagerUI",
    ):
        options.add_argument(arg)

    options.add_experimental_option("prefs", dict(CHROME_PREFS))
    options.unhandled_prompt_behavior = "ignore"
    return options


async def start_selenium_driver(settings: UiSettings) -> "SeleniumDriver":
    """
    Start Chrome, bounded by ``startup_timeout_ms``.

    Raises:
        asyncio.TimeoutError: Chrome did not start in time
        WebDriverException: Chrome or chromedriver could not be started
    """
    logger.info(f"Running in {'HEADLESS' if settings.headless else 'VISIBLE'} mode (selenium/chrome)")
    options = chrome_options(settings)
    chrome = await asyncio.wait_for(
        asyncio.to_thread(webdriver.Chrome, options=options),
        timeout=settings.startup_timeout_ms / 1000,
    )
    logger.debug("Chrome WebDriver started")
    return SeleniumDriver(chrome)


class SeleniumDriver(BrowserDriver):
    """
    `BrowserDriver` over a Selenium WebDriver.

    A WebDriver click returns once it is dispatched even when it opens an
    alert, so actions are not raced against dialogs here.
    """

    def __init__(self, wd: WebDriver):
        super().__init__()
        self.wd = wd

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking WebDriver call in a thread, translating its errors."""
        try:
            return await asyncio.to_thread(fn, *args)
        except StaleElementReferenceException as exc:
            raise StaleElementError(str(exc)) from exc
        except (InvalidSessionIdException, NoSuchWindowException) as exc:
            raise SessionLostError(str(exc)) from exc
        except WebDriverException as exc:
            if any(m in str(exc).lower() for m in _SESSION_LOST_MARKERS):
                raise SessionLostError(str(exc)) from exc
            raise

    async def locate(self, locator: Locator) -> Optional[WebElement]:
        found = await self.locate_all(locator)
        return found[0] if found else None

    async def locate_all(self, locator: Locator) -> List[WebElement]:
        return await self._call(self.wd.find_elements, _BY[locator.strategy], locator.value)

    async def is_visible(self, handle: WebElement) -> bool:
        return await self._call(handle.is_displayed)

    async def is_enabled(self, handle: WebElement) -> bool:
        return await self._call(handle.is_enabled)

    async def act(self, handle: WebElement, action: Action) -> Any:
        if action.kind is ActionKind.CLICK:
            await self._call(handle.click)
        elif action.kind is ActionKind.TYPE:
            await self._call(handle.clear)
            await self._call(handle.send_keys, action.text or "")
        elif action.kind is ActionKind.CLEAR:
            await self._call(handle.clear)
        elif action.kind is ActionKind.READ_TEXT:
            return await self._call(lambda: handle.text)
        else:
            raise ValueError(f"Unknown action: {action.kind}")
        return None

    async def current_title(self) -> str:
        return await self._call(lambda: self.wd.title)

    async def take_screenshot(self) -> bytes:
        return await self._call(self.wd.get_screenshot_as_png)

    async def alert_text(self) -> Optional[str]:
        def read() -> Optional[str]:
            try:
                return self.wd.switch_to.alert.text
            except NoAlertPresentException:
                return None

        return await self._call(read)

    async def accept_alert(self) -> None:
        def accept() -> None:
            try:
                self.wd.switch_to.alert.accept()
            except NoAlertPresentException as exc:
                raise LookupError("No dialog is open") from exc

        await self._call(accept)

    async def navigate(self, url: str) -> None:
        await self._call(self.wd.get, url)
        logger.debug(f"Navigated to: {url}")

    async def quit(self) -> None:
        try:
            await asyncio.to_thread(self.wd.quit)
        except WebDriverException as e:
            logger.debug(f"WebDriver already gone: {e}")


__all__ = [
    "CHROME_PREFS",
    "SeleniumDriver",
    "chrome_options",
    "start_selenium_driver",
]
