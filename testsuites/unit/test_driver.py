import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.driver import Action, PlaywrightDriver
from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.results import SessionLostError, StaleElementError
from testsuites.ui_testing.framework.settings import UiSettings


class DummyDialog:
    type = "alert"

    def __init__(self, message):
        self.message = message
        self.accepted = False
        self.handled = asyncio.Event()

    async def accept(self):
        self.accepted = True
        self.handled.set()


class DummyHandle:
    def __init__(self, error=None):
        self.error = error
        self.filled = None

    async def click(self):
        if self.error:
            raise self.error

    async def fill(self, text):
        self.filled = text

    async def inner_text(self):
        return "Swag Labs"


class AlertingHandle:
    """Click opens a dialog and, like Playwright, only returns once it is handled."""

    def __init__(self, page, dialog, error=None):
        self.page = page
        self.dialog = dialog
        self.error = error
        self.finished = False

    async def click(self):
        self.page.handlers["dialog"](self.dialog)
        await self.dialog.handled.wait()
        if self.error:
            raise self.error
        self.finished = True


class DummyPage:
    def __init__(self):
        self.closed = False
        self.default_timeout = None
        self.handlers = {}
        self.selectors = []

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def on(self, event, handler):
        self.handlers[event] = handler

    def is_closed(self):
        return self.closed

    async def query_selector(self, selector):
        self.selectors.append(selector)
        if "broken" in selector:
            raise PlaywrightError("Target page, context or browser has been closed")
        return DummyHandle()


@pytest.fixture
def page():
    return DummyPage()


def test_driver_configures_page(page):
    PlaywrightDriver(page, implicit_wait_ms=1234)

    assert page.default_timeout == 1234
    assert "dialog" in page.handlers


async def test_locate_uses_strategy_selector(page):
    driver = PlaywrightDriver(page)

    assert await driver.locate(Locator.by_id("user-name")) is not None
    assert page.selectors == ["id=user-name"]

    with pytest.raises(SessionLostError):
        await driver.locate(Locator.css("div.broken"))


async def test_actions_dispatch_to_handle(page):
    driver = PlaywrightDriver(page)
    handle = DummyHandle()

    await driver.act(handle, Action.type_text("standard_user"))
    assert handle.filled == "standard_user"
    await driver.act(handle, Action.clear())
    assert handle.filled == ""
    assert await driver.act(handle, Action.read_text()) == "Swag Labs"


async def test_detached_handle_is_stale(page):
    driver = PlaywrightDriver(page)
    handle = DummyHandle(PlaywrightError("Element is not attached to the DOM"))

    with pytest.raises(StaleElementError):
        await driver.act(handle, Action.click())


async def test_other_errors_pass_through(page):
    driver = PlaywrightDriver(page)
    handle = DummyHandle(PlaywrightError("Element is outside of the viewport"))

    with pytest.raises(PlaywrightError):
        await driver.act(handle, Action.click())


async def test_closed_page_is_session_lost(page):
    driver = PlaywrightDriver(page)
    page.closed = True

    with pytest.raises(SessionLostError):
        await driver.current_title()


async def test_dialogs_are_queued_until_accepted(page):
    driver = PlaywrightDriver(page)
    assert await driver.alert_text() is None

    dialog = DummyDialog("Welcome!")
    page.handlers["dialog"](dialog)
    assert await driver.alert_text() == "Welcome!"

    await driver.accept_alert()
    assert dialog.accepted
    assert await driver.alert_text() is None
    with pytest.raises(LookupError):
        await driver.accept_alert()


def test_launch_options():
    headless = BrowserManager(UiSettings(headless=True, startup_timeout_ms=15000)).launch_options()
    assert headless["headless"] is True
    assert headless["timeout"] == 15000
    assert "--no-sandbox" in headless["args"]
    assert "--disable-save-password-bubble" in headless["args"]

    headed = BrowserManager(UiSettings(headless=False)).launch_options()
    assert "--start-maximized" in headed["args"]

    firefox = BrowserManager(UiSettings(browser="firefox")).launch_options()
    assert "args" not in firefox


async def test_click_returns_when_it_opens_a_dialog(page):
    driver = PlaywrightDriver(page)
    dialog = DummyDialog("Welcome!")
    handle = AlertingHandle(page, dialog)

    assert await asyncio.wait_for(driver.act(handle, Action.click()), timeout=1) is None
    assert not handle.finished
    assert driver.pending_actions == 1
    assert await driver.alert_text() == "Welcome!"

    await driver.accept_alert()

    assert dialog.accepted
    assert handle.finished
    assert driver.pending_actions == 0


async def test_click_failing_after_its_dialog_is_accepted_is_logged(page):
    driver = PlaywrightDriver(page, implicit_wait_ms=500)
    dialog = DummyDialog("Welcome!")
    handle = AlertingHandle(page, dialog, error=PlaywrightError("Element is outside of the viewport"))

    await driver.act(handle, Action.click())
    await driver.accept_alert()

    assert driver.pending_actions == 0


async def test_manager_pages_need_a_started_browser():
    manager = BrowserManager(UiSettings())

    assert not hasattr(manager, "browser")
    with pytest.raises(RuntimeError):
        await manager.new_page()
    await manager.close()
