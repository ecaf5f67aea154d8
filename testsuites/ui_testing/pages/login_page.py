"""
================================================================================
Login Page Object (Async)
================================================================================

Login form of the Swag Labs demo shop.

Flow:
  open() -> login(username, password) -> Flow

`login` fills the form, submits it, clears any interstitials (alerts, the
browser's password prompts) and then waits for whichever comes first: the
inventory list (CONFIRMED once the title also reads "Swag Labs") or the
error banner (FAILED, banner text in `flow.message`).

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.conditions import (
    AnyOf,
    ElementPresent,
    ElementVisible,
)
from testsuites.ui_testing.framework.flow import Flow
from testsuites.ui_testing.framework.interstitials import LOGIN_INTERSTITIALS
from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.results import InteractionResult


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Swag Labs"

    USERNAME_INPUT = Locator.by_id("user-name", name="username input")
    PASSWORD_INPUT = Locator.by_id("password", name="password input")
    LOGIN_BUTTON = Locator.by_id("login-button", name="login button")
    ERROR_MESSAGE = Locator.css("h3[data-test='error']", name="login error banner")
    INVENTORY_CONTAINER = Locator.by_id("inventory_container", name="inventory container")

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the login page and wait for the form."""
        await self.navigate()
        await self.wait_for(ElementVisible(self.USERNAME_INPUT))
        return self

    async def enter_username(self, username: str) -> InteractionResult:
        logger.info(f"Entering username: {username}")
        cleared = await self.clear(self.USERNAME_INPUT)
        if not cleared.ok:
            return cleared
        return await self.type_text(self.USERNAME_INPUT, username)

    async def enter_password(self, password: str) -> InteractionResult:
        logger.info("Entering password...")
        cleared = await self.clear(self.PASSWORD_INPUT)
        if not cleared.ok:
            return cleared
        return await self.type_text(self.PASSWORD_INPUT, password)

    async def click_login(self) -> InteractionResult:
        logger.info("Clicking login button...")
        return await self.click(self.LOGIN_BUTTON)

    async def login(self, username: str, password: str) -> Flow:
        """
        Perform login.

        Args:
            username: Username to login with
            password: Password to login with

        Returns:
            CONFIRMED flow when the inventory is shown under a "Swag Labs"
            title, FAILED flow otherwise.
        """
        with allure.step(f"Login (username={username})"):
            return await self._login(username, password)

    async def _login(self, username: str, password: str) -> Flow:
        flow = self.start_flow(f"login[{username}]")

        for step in (
            lambda: self.enter_username(username),
            lambda: self.enter_password(password),
            self.click_login,
        ):
            result = await step()
            if not result.ok:
                return self.fail_flow(flow, result)

        await self.dismiss_interstitials()

        landed = await self.wait_for(
            AnyOf((ElementPresent(self.INVENTORY_CONTAINER), ElementVisible(self.ERROR_MESSAGE)))
        )
        if not landed.ok:
            message = await self.get_error_message(timeout_ms=self.settings.interstitial_timeout_ms)
            return self.fail_flow(flow, landed, message)

        index, _ = landed.value
        if index == 1:
            message = await self.get_error_message()
            rejected = InteractionResult.not_found(
                locator=self.INVENTORY_CONTAINER,
                condition=ElementPresent(self.INVENTORY_CONTAINER),
                elapsed_ms=landed.elapsed_ms,
            )
            return self.fail_flow(flow, rejected, message)

        title = await self.wait_for_title_contains(self.PAGE_TITLE)
        if not title.ok:
            return self.fail_flow(flow, title)

        return flow.confirm(title, value=title.value)

    async def dismiss_interstitials(self, rules=LOGIN_INTERSTITIALS) -> bool:
        """Clear alerts and password-manager prompts that can follow a login submit."""
        return await super().dismiss_interstitials(rules)

    async def get_error_message(self, timeout_ms: Optional[int] = None) -> str:
        """
        Text of the login error banner, "" when there is none.

        Retried per the configured policy, as the banner can render late.
        """
        result = await self.read_text_with_retry(self.ERROR_MESSAGE, timeout_ms)
        if not result.ok:
            logger.info(f"No login error message: {result.describe()}")
            return ""
        return result.value


__all__ = [
    "LoginPage",
]
