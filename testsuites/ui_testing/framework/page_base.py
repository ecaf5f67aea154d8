"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - The waiter / executor / dismisser stack for one browser session
    - Navigation and URL handling
    - Condition and interaction helpers returning InteractionResult values
    - Flow bookkeeping (start, confirm, fail + diagnostics attachment)
    - Screenshot capture to disk and Allure

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import allure
from loguru import logger

from autotest_tools.common import add_timestamp, ensure_directory
from autotest_tools.report_tools.allure_utils import attach_flow, attach_png, attach_text

from .conditions import ElementPresent, TitleContains, WaitCondition
from .driver import Action, BrowserDriver
from .element_actions import ActionExecutor
from .flow import Flow
from .interstitials import DismissalRule, InterstitialDismisser
from .locator import Locator
from .results import InteractionResult
from .retry import with_retry
from .settings import UiSettings
from .waiter import Waiter


class BasePage:
    """
    Base class for all page objects.

    Provides common functionality for:
        - Navigation and URL handling
        - Waiting on conditions with the configured deadline
        - Interactions through the ActionExecutor
        - Interstitial dismissal
        - Screenshot capture

    Usage:
        class InventoryPage(BasePage):
            URL_PATH = "/inventory.html"

            async def open_cart(self) -> Flow:
                flow = self.start_flow("open_cart")
                result = await self.click(self.CART_LINK, post_condition=...)
                ...
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = "Swag Labs"

    def __init__(
        self,
        driver: BrowserDriver,
        settings: Optional[UiSettings] = None,
    ):
        """
        Initialize page object.

        Args:
            driver: Browser primitives for this test case's session
            settings: Run settings for this test case
        """
        self.driver = driver
        self.settings = settings or UiSettings()
        self.base_url = self.settings.base_url.rstrip("/")

        self.waiter = Waiter(driver, self.settings.default_deadline())
        self.actions = ActionExecutor(driver, self.waiter)
        self.dismisser = InterstitialDismisser(self.actions)
        self.retry_policy = self.settings.retry_policy()

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}/{self.URL_PATH.lstrip('/')}"

    async def navigate(self) -> None:
        """Navigate to this page."""
        with allure.step(f"Navigate to {self.url}"):
            await self.driver.navigate(self.url)

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait_for(
        self,
        condition: WaitCondition,
        timeout_ms: Optional[int] = None,
    ) -> InteractionResult:
        """
        Wait for `condition` with the configured deadline.

        Args:
            condition: Condition to poll
            timeout_ms: Overrides the configured default timeout
        """
        return await self.waiter.wait(condition, self.settings.default_deadline(timeout_ms))

    async def is_present(self, locator: Locator, timeout_ms: Optional[int] = None) -> bool:
        result = await self.wait_for(ElementPresent(locator), timeout_ms)
        return result.ok

    async def wait_for_title_contains(self, text: str, timeout_ms: Optional[int] = None) -> InteractionResult:
        return await self.wait_for(TitleContains(text), timeout_ms)

    # =========================================================================
    # Interactions
    # =========================================================================

    async def click(
        self,
        locator: Locator,
        post_condition: Optional[WaitCondition] = None,
        timeout_ms: Optional[int] = None,
    ) -> InteractionResult:
        return await self.actions.perform(
            locator,
            Action.click(),
            self.settings.default_deadline(timeout_ms),
            post_condition=post_condition,
        )

    async def type_text(
        self,
        locator: Locator,
        text: str,
        timeout_ms: Optional[int] = None,
    ) -> InteractionResult:
        return await self.actions.perform(
            locator, Action.type_text(text), self.settings.default_deadline(timeout_ms)
        )

    async def clear(self, locator: Locator, timeout_ms: Optional[int] = None) -> InteractionResult:
        return await self.actions.perform(
            locator, Action.clear(), self.settings.default_deadline(timeout_ms)
        )

    async def read_text(self, locator: Locator, timeout_ms: Optional[int] = None) -> InteractionResult:
        return await self.actions.perform(
            locator, Action.read_text(), self.settings.default_deadline(timeout_ms)
        )

    async def read_text_with_retry(
        self,
        locator: Locator,
        timeout_ms: Optional[int] = None,
    ) -> InteractionResult:
        """Read element text, retried per the configured policy while it is not there yet."""
        return await with_retry(
            lambda: self.read_text(locator, timeout_ms),
            self.retry_policy,
            description=f"read text of {locator}",
        )

    async def dismiss_interstitials(self, rules: Sequence[DismissalRule]) -> bool:
        """Best-effort dismissal of alerts and browser prompts. Never raises."""
        return await self.dismisser.dismiss_if_present(
            rules, timeout_ms=self.settings.interstitial_timeout_ms
        )

    # =========================================================================
    # Flows
    # =========================================================================

    def start_flow(self, name: str) -> Flow:
        return Flow(name).start()

    def fail_flow(self, flow: Flow, result: InteractionResult, message: str = "") -> Flow:
        """Mark `flow` failed and attach its diagnostics to the report."""
        flow.fail(result, message)
        attach_flow(flow)
        if message:
            attach_text(message, name=f"{flow.name} page message")
        return flow

    # =========================================================================
    # Screenshot Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        directory = Path(ensure_directory(str(self.settings.screenshot_dir)))
        filepath = directory / f"{add_timestamp(name)}.png"

        png = await self.driver.take_screenshot()
        filepath.write_bytes(png)

        if attach_to_allure:
            attach_png(png, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r})"


__all__ = [
    "BasePage",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
