"""
In-memory browser for framework tests.

`FakeDriver` keeps a table of elements keyed by selector string, so tests
register exactly the locators the code under test will ask for.
`SwagLabsSimulator` wires such a table up to behave like the demo shop's
login, inventory and cart pages.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Dict, List, Optional, Sequence

from testsuites.ui_testing.framework.driver import Action, ActionKind, BrowserDriver
from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.results import SessionLostError, StaleElementError
from testsuites.ui_testing.pages.cart_page import CartPage
from testsuites.ui_testing.pages.inventory_page import InventoryPage
from testsuites.ui_testing.pages.login_page import LoginPage


class FakeElement:
    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        enabled: bool = True,
        on_click: Optional[Callable[[], None]] = None,
        stale_times: int = 0,
        fail_with: Optional[Exception] = None,
    ):
        self.text = text
        self.value = ""
        self.visible = visible
        self.enabled = enabled
        self.on_click = on_click
        self.stale_times = stale_times
        self.fail_with = fail_with
        self.clicks = 0

    def __repr__(self) -> str:
        return f"FakeElement(text={self.text!r})"


class FakeDriver(BrowserDriver):
    """
    Like a real browser, a click that opens an alert does not finish until
    the alert is accepted.
    """

    def __init__(self, title: str = ""):
        super().__init__()
        self.title = title
        self.elements: Dict[str, List[FakeElement]] = {}
        self.alerts: List[str] = []
        self.accept_error: Optional[Exception] = None
        self.navigations: List[str] = []
        self.on_navigate: Optional[Callable[[str], None]] = None
        self.closed = False
        self.locate_calls = 0
        self.locate_error: Optional[Exception] = None
        self._appear_at: Dict[str, float] = {}

    # -- test setup ---------------------------------------------------------

    def add(self, locator: Locator, element: Optional[FakeElement] = None, delay_ms: int = 0) -> FakeElement:
        element = element or FakeElement()
        self.elements.setdefault(locator.selector, []).append(element)
        if delay_ms:
            self._appear_at[locator.selector] = time.monotonic() + delay_ms / 1000
        return element

    def remove(self, locator: Locator) -> None:
        self.elements.pop(locator.selector, None)
        self._appear_at.pop(locator.selector, None)

    def clear_page(self) -> None:
        self.elements.clear()
        self._appear_at.clear()

    def close(self) -> None:
        self.closed = True

    def _check_open(self) -> None:
        if self.closed:
            raise SessionLostError("Page has been closed")

    # -- BrowserDriver ------------------------------------------------------

    async def locate(self, locator: Locator) -> Optional[FakeElement]:
        found = await self.locate_all(locator)
        return found[0] if found else None

    async def locate_all(self, locator: Locator) -> List[FakeElement]:
        self._check_open()
        self.locate_calls += 1
        if self.locate_error is not None:
            raise self.locate_error
        appear_at = self._appear_at.get(locator.selector)
        if appear_at is not None and time.monotonic() < appear_at:
            return []
        return list(self.elements.get(locator.selector, []))

    async def is_visible(self, handle: FakeElement) -> bool:
        self._check_open()
        return handle.visible

    async def is_enabled(self, handle: FakeElement) -> bool:
        self._check_open()
        return handle.enabled

    async def act(self, handle: FakeElement, action: Action):
        self._check_open()
        return await self._dispatch_until_dialog(self._act(handle, action))

    async def _act(self, handle: FakeElement, action: Action):
        if handle.stale_times > 0:
            handle.stale_times -= 1
            raise StaleElementError("element is detached from the DOM")
        if handle.fail_with is not None:
            raise handle.fail_with
        if action.kind is ActionKind.CLICK:
            handle.clicks += 1
            alerts_before = len(self.alerts)
            if handle.on_click is not None:
                handle.on_click()
            if len(self.alerts) > alerts_before:
                self._notify_dialog()
                while self.alerts and not self.closed:
                    await asyncio.sleep(0.005)
        elif action.kind is ActionKind.TYPE:
            handle.value = action.text or ""
        elif action.kind is ActionKind.CLEAR:
            handle.value = ""
        elif action.kind is ActionKind.READ_TEXT:
            return handle.text
        return None

    async def current_title(self) -> str:
        self._check_open()
        return self.title

    async def take_screenshot(self) -> bytes:
        self._check_open()
        return b"\x89PNG\r\n\x1a\nfake"

    async def alert_text(self) -> Optional[str]:
        self._check_open()
        return self.alerts[0] if self.alerts else None

    async def accept_alert(self) -> None:
        self._check_open()
        if self.accept_error is not None:
            raise self.accept_error
        if not self.alerts:
            raise LookupError("No dialog is open")
        self.alerts.pop(0)
        if not self.alerts:
            await self._settle_blocked_actions(1000)

    async def navigate(self, url: str) -> None:
        self._check_open()
        self.navigations.append(url)
        if self.on_navigate is not None:
            self.on_navigate(url)


BAD_CREDENTIALS = "Epic sadface: Username and password do not match any user in this service"
USERNAME_REQUIRED = "Epic sadface: Username is required"


class SwagLabsSimulator:
    """
    Swag Labs behaviour on top of a FakeDriver.

    Args:
        driver: Driver to drive
        users: Accepted username -> password pairs
        items: Product names on the inventory page
        alert_on_login: Text of a JavaScript alert raised by the login submit
        inventory_delay_ms: Delay before the inventory shows after login
        banner_delay_ms: Delay before the error banner shows after a bad login
    """

    def __init__(
        self,
        driver: FakeDriver,
        users: Optional[Dict[str, str]] = None,
        items: Sequence[str] = ("Sauce Labs Backpack", "Sauce Labs Bike Light", "Sauce Labs Onesie"),
        alert_on_login: Optional[str] = None,
        inventory_delay_ms: int = 0,
        banner_delay_ms: int = 0,
    ):
        self.driver = driver
        self.users = users if users is not None else {"standard_user": "secret_sauce"}
        self.items = list(items)
        self.alert_on_login = alert_on_login
        self.inventory_delay_ms = inventory_delay_ms
        self.banner_delay_ms = banner_delay_ms
        self.cart: List[str] = []
        driver.on_navigate = self._on_navigate

    def _on_navigate(self, url: str) -> None:
        self.show_login()

    def show_login(self) -> None:
        d = self.driver
        d.clear_page()
        d.title = "Swag Labs"
        self.username = d.add(LoginPage.USERNAME_INPUT)
        self.password = d.add(LoginPage.PASSWORD_INPUT)
        d.add(LoginPage.LOGIN_BUTTON, FakeElement("Login", on_click=self._submit_login))

    def _submit_login(self) -> None:
        if self.alert_on_login:
            self.driver.alerts.append(self.alert_on_login)
        username, password = self.username.value, self.password.value
        if not username:
            self._show_banner(USERNAME_REQUIRED)
        elif self.users.get(username) != password:
            self._show_banner(BAD_CREDENTIALS)
        else:
            self.show_inventory()

    def _show_banner(self, text: str) -> None:
        self.driver.remove(LoginPage.ERROR_MESSAGE)
        self.driver.add(LoginPage.ERROR_MESSAGE, FakeElement(text), delay_ms=self.banner_delay_ms)

    def show_inventory(self) -> None:
        d = self.driver
        d.clear_page()
        d.title = "Swag Labs"
        d.add(InventoryPage.INVENTORY_CONTAINER, delay_ms=self.inventory_delay_ms)
        d.add(InventoryPage.CART_LINK, FakeElement(on_click=self.show_cart))
        for name in self.items:
            d.add(InventoryPage.item_name(name), FakeElement(name))
            self._show_item_button(name)

    def _show_item_button(self, name: str) -> None:
        d = self.driver
        d.remove(InventoryPage.add_button(name))
        d.remove(InventoryPage.remove_button(name))
        if name in self.cart:
            d.add(InventoryPage.remove_button(name), FakeElement("Remove", on_click=lambda: self._toggle(name)))
        else:
            d.add(InventoryPage.add_button(name), FakeElement("Add to cart", on_click=lambda: self._toggle(name)))

    def _toggle(self, name: str) -> None:
        if name in self.cart:
            self.cart.remove(name)
        else:
            self.cart.append(name)
        self._show_item_button(name)

    def show_cart(self) -> None:
        d = self.driver
        d.clear_page()
        d.add(CartPage.CART_HEADER, FakeElement("Your Cart"))
        for position, name in enumerate(self.cart, start=1):
            d.add(CartPage.cart_item(name), FakeElement(name))
            d.add(CartPage.CART_ITEM_NAMES, FakeElement(f"{name} "))
            d.add(CartPage.cart_item_name(position), FakeElement(f"{name} "))
