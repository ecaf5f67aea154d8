import pytest
from selenium.common.exceptions import (
    InvalidSessionIdException,
    NoAlertPresentException,
    StaleElementReferenceException,
    WebDriverException,
)
from selenium.webdriver.common.by import By

from testsuites.ui_testing.framework.driver import Action
from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.results import SessionLostError, StaleElementError
from testsuites.ui_testing.framework.selenium_driver import (
    CHROME_PREFS,
    SeleniumDriver,
    chrome_options,
)
from testsuites.ui_testing.framework.settings import UiSettings


class DummyElement:
    def __init__(self, text="Swag Labs", error=None):
        self.text = text
        self.error = error
        self.keys = []
        self.clicks = 0
        self.cleared = 0

    def click(self):
        if self.error:
            raise self.error
        self.clicks += 1

    def clear(self):
        self.cleared += 1

    def send_keys(self, text):
        self.keys.append(text)

    def is_displayed(self):
        return True

    def is_enabled(self):
        return False


class DummyAlert:
    def __init__(self, text):
        self.text = text
        self.accepted = False

    def accept(self):
        self.accepted = True


class DummySwitchTo:
    def __init__(self):
        self.open_alert = None

    @property
    def alert(self):
        if self.open_alert is None:
            raise NoAlertPresentException("no such alert")
        return self.open_alert


class DummyWebDriver:
    title = "Swag Labs"

    def __init__(self, elements=None, error=None):
        self.elements = elements or {}
        self.error = error
        self.lookups = []
        self.visited = []
        self.switch_to = DummySwitchTo()
        self.quit_error = None

    def find_elements(self, by, value):
        self.lookups.append((by, value))
        if self.error:
            raise self.error
        return self.elements.get(value, [])

    def get(self, url):
        self.visited.append(url)

    def get_screenshot_as_png(self):
        return b"\x89PNG"

    def quit(self):
        if self.quit_error:
            raise self.quit_error


async def test_locate_maps_strategies_to_by():
    first, second = DummyElement("Backpack"), DummyElement("Bike Light")
    wd = DummyWebDriver({"user-name": [first], "div.cart_item": [first, second]})
    driver = SeleniumDriver(wd)

    assert await driver.locate(Locator.by_id("user-name")) is first
    assert await driver.locate_all(Locator.css("div.cart_item")) == [first, second]
    assert await driver.locate(Locator.xpath("//h3")) is None
    assert wd.lookups == [
        (By.ID, "user-name"),
        (By.CSS_SELECTOR, "div.cart_item"),
        (By.XPATH, "//h3"),
    ]


async def test_actions_dispatch_to_element():
    driver = SeleniumDriver(DummyWebDriver())
    element = DummyElement()

    await driver.act(element, Action.type_text("standard_user"))
    assert element.cleared == 1
    assert element.keys == ["standard_user"]

    await driver.act(element, Action.click())
    assert element.clicks == 1
    assert await driver.act(element, Action.read_text()) == "Swag Labs"
    assert await driver.is_visible(element) is True
    assert await driver.is_enabled(element) is False


async def test_webdriver_errors_are_translated():
    driver = SeleniumDriver(DummyWebDriver())

    with pytest.raises(StaleElementError):
        await driver.act(DummyElement(error=StaleElementReferenceException("stale")), Action.click())

    lost = SeleniumDriver(DummyWebDriver(error=InvalidSessionIdException("invalid session id")))
    with pytest.raises(SessionLostError):
        await lost.locate(Locator.by_id("login-button"))

    unreachable = SeleniumDriver(DummyWebDriver(error=WebDriverException("chrome not reachable")))
    with pytest.raises(SessionLostError):
        await unreachable.current_title()

    other = DummyElement(error=WebDriverException("element click intercepted"))
    with pytest.raises(WebDriverException):
        await driver.act(other, Action.click())


async def test_alerts_go_through_switch_to():
    wd = DummyWebDriver()
    driver = SeleniumDriver(wd)

    assert await driver.alert_text() is None
    with pytest.raises(LookupError):
        await driver.accept_alert()

    alert = DummyAlert("Welcome!")
    wd.switch_to.open_alert = alert
    assert await driver.alert_text() == "Welcome!"
    await driver.accept_alert()
    assert alert.accepted


async def test_navigation_title_and_screenshot():
    wd = DummyWebDriver()
    driver = SeleniumDriver(wd)

    await driver.navigate("https://www.saucedemo.com/")

    assert wd.visited == ["https://www.saucedemo.com/"]
    assert await driver.current_title() == "Swag Labs"
    assert await driver.take_screenshot() == b"\x89PNG"


async def test_quit_tolerates_a_dead_session():
    wd = DummyWebDriver()
    wd.quit_error = WebDriverException("chrome not reachable")

    await SeleniumDriver(wd).quit()


def test_chrome_options():
    headless = chrome_options(UiSettings(headless=True))
    assert "--headless=new" in headless.arguments
    assert "--disable-save-password-bubble" in headless.arguments
    assert headless.experimental_options["prefs"] == CHROME_PREFS
    assert headless.unhandled_prompt_behavior == "ignore"

    headed = chrome_options(UiSettings(headless=False))
    assert "--start-maximized" in headed.arguments
    assert "--headless=new" not in headed.arguments
