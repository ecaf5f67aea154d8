"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Settings built once per test case from config.yaml + environment
- Browser and page lifecycle management (skips when no browser can launch)
- Page Object fixtures for all pages
- Screenshot after every test, named after the test and its outcome

================================================================================
"""

import asyncio
import os
import re
from typing import AsyncGenerator

import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from selenium.common.exceptions import WebDriverException

from autotest_tools.common import init_logger
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.driver import BrowserDriver, PlaywrightDriver
from testsuites.ui_testing.framework.selenium_driver import start_selenium_driver
from testsuites.ui_testing.framework.settings import UiSettings
from testsuites.ui_testing.pages.cart_page import CartPage
from testsuites.ui_testing.pages.inventory_page import InventoryPage
from testsuites.ui_testing.pages.login_page import LoginPage


# ================================================================================
# Settings Fixtures
# ================================================================================

@pytest.fixture
def settings() -> UiSettings:
    """
    Run settings for one test case.

    Loaded fresh for every test so environment overrides apply per case.
    """
    settings = UiSettings.load()
    init_logger(level=settings.log_level, log_file=settings.log_file)
    return settings


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def driver(settings: UiSettings) -> AsyncGenerator[BrowserDriver, None]:
    """
    Browser primitives for the configured engine (ui.engine).

    playwright: a fresh page in an isolated context of its own browser.
    selenium: a fresh Chrome WebDriver session.
    """
    if settings.engine == "selenium":
        try:
            selenium_driver = await start_selenium_driver(settings)
        except (WebDriverException, asyncio.TimeoutError) as e:
            pytest.skip(f"Chrome WebDriver could not be started: {e}")
        yield selenium_driver
        await selenium_driver.quit()
        return

    manager = BrowserManager(settings)
    try:
        await manager.start()
    except PlaywrightError as e:
        pytest.skip(f"Browser could not be launched: {e}")
    page = await manager.new_page()
    yield PlaywrightDriver(page, implicit_wait_ms=settings.implicit_wait_ms)
    await manager.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(driver: BrowserDriver, settings: UiSettings) -> LoginPage:
    """
    Provides LoginPage instance.

    Use this fixture for tests that interact with the login page.
    """
    return LoginPage(driver, settings)


@pytest.fixture
def inventory_page(driver: BrowserDriver, settings: UiSettings) -> InventoryPage:
    """
    Provides InventoryPage instance.
    """
    return InventoryPage(driver, settings)


@pytest.fixture
def cart_page(driver: BrowserDriver, settings: UiSettings) -> CartPage:
    """
    Provides CartPage instance.
    """
    return CartPage(driver, settings)


# ================================================================================
# Authentication Fixtures
# ================================================================================

@pytest.fixture
async def logged_in_inventory(login_page: LoginPage, inventory_page: InventoryPage, test_data) -> InventoryPage:
    """
    Provides InventoryPage after a confirmed login.
    """
    user = test_data["valid_user"]
    await login_page.open()
    flow = await login_page.login(user["username"], user["password"])
    flow.raise_for_state()
    return inventory_page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep each phase's report on the item so fixtures can see the outcome.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(autouse=True)
async def screenshot_after_test(request, login_page: LoginPage) -> AsyncGenerator[None, None]:
    """
    Capture a screenshot after every test, passed or failed, and attach it
    to the Allure report as `<test>__<outcome>`.
    """
    yield

    report = getattr(request.node, "rep_call", None)
    state = report.outcome if report is not None else "unknown"
    safe_name = re.sub(r"[^a-z0-9\-]", "_", f"{request.node.name}__{state}".lower())
    try:
        await login_page.screenshot(safe_name)
    except Exception as e:
        # Log but don't fail if screenshot capture fails
        logger.warning(f"Could not capture screenshot: {e}")


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "valid_user": {
            "username": os.getenv("UI_USERNAME", "standard_user"),
            "password": os.getenv("UI_PASSWORD", "secret_sauce"),
        },
        "invalid_user": {
            "username": "invalid_user",
            "password": "wrong_password",
        },
        "locked_out_user": {
            "username": "locked_out_user",
            "password": "secret_sauce",
        },
        "item": "Sauce Labs Backpack",
        "other_item": "Sauce Labs Bike Light",
    }
