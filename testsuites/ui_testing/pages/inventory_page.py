"""
================================================================================
Inventory Page Object (Async)
================================================================================

Product list shown after a successful login.

Item controls are located from the product name:

    //div[text()=NAME]//ancestor::div[contains(@class,'inventory_item')]
        //button[text()='Add to cart']      (or 'Remove')

Every state-changing click is confirmed by the opposite control appearing:
"Add to cart" is done once "Remove" is present, and vice versa.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.conditions import ElementPresent, ElementVisible
from testsuites.ui_testing.framework.flow import Flow
from testsuites.ui_testing.framework.locator import Locator, xpath_literal
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.results import InteractionResult

from .cart_page import CartPage


class InventoryPage(PageBase):
    """Inventory page object (async)."""

    URL_PATH = "/inventory.html"
    PAGE_TITLE = "Swag Labs"

    INVENTORY_CONTAINER = Locator.by_id("inventory_container", name="inventory container")
    CART_LINK = Locator.css("a.shopping_cart_link", name="cart link")

    # -------------------------------------------------------------------------
    # Locator builders
    # -------------------------------------------------------------------------

    @staticmethod
    def _item_root(name: str) -> str:
        return f"//div[text()={xpath_literal(name)}]//ancestor::div[contains(@class,'inventory_item')]"

    @classmethod
    def add_button(cls, name: str) -> Locator:
        return Locator.xpath(
            f"{cls._item_root(name)}//button[text()='Add to cart']",
            name=f"'Add to cart' for '{name}'",
        )

    @classmethod
    def remove_button(cls, name: str) -> Locator:
        return Locator.xpath(
            f"{cls._item_root(name)}//button[text()='Remove']",
            name=f"'Remove' for '{name}'",
        )

    @classmethod
    def item_name(cls, name: str) -> Locator:
        return Locator.xpath(
            f"{cls._item_root(name)}//div[contains(@class,'inventory_item_name')]",
            name=f"name of '{name}'",
        )

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    @allure.step("Verify inventory page is displayed")
    async def is_at_inventory_page(self) -> bool:
        title = await self.wait_for_title_contains(self.PAGE_TITLE)
        if not title.ok:
            logger.info(f"Not on inventory page: {title.describe()}")
            return False
        container = await self.wait_for_inventory_container()
        return container.ok

    async def wait_for_inventory_container(self, timeout_ms: Optional[int] = None) -> InteractionResult:
        """The product list being present is the signal that the page has loaded."""
        return await self.wait_for(ElementPresent(self.INVENTORY_CONTAINER), timeout_ms)

    async def is_remove_button_visible(self, name: str, timeout_ms: Optional[int] = None) -> bool:
        """True when the item's "Remove" control shows within the timeout."""
        result = await self.wait_for(ElementVisible(self.remove_button(name)), timeout_ms)
        logger.info(f"Remove button visible for '{name}': {result.ok}")
        return result.ok

    # -------------------------------------------------------------------------
    # Flows
    # -------------------------------------------------------------------------

    @allure.step("Add '{name}' to cart")
    async def add_item_to_cart(self, name: str) -> Flow:
        """
        Click the item's "Add to cart" control.

        Returns:
            CONFIRMED flow once "Remove" is present, with the item name as
            displayed on the page in `flow.value`; FAILED flow otherwise.
        """
        flow = self.start_flow(f"add_item_to_cart[{name}]")

        ready = await self.wait_for_inventory_container()
        if not ready.ok:
            return self.fail_flow(flow, ready)

        clicked = await self.click(
            self.add_button(name),
            post_condition=ElementPresent(self.remove_button(name)),
        )
        if not clicked.ok:
            return self.fail_flow(flow, clicked)

        displayed = name
        shown = await self.read_text(self.item_name(name), self.settings.interstitial_timeout_ms)
        if shown.ok and shown.value:
            displayed = shown.value.strip()
        else:
            logger.warning(f"Could not read displayed item name for '{name}': {shown.describe()}")

        return flow.confirm(clicked, value=displayed)

    @allure.step("Remove '{name}' from cart")
    async def remove_item_from_cart(self, name: str) -> Flow:
        """Click the item's "Remove" control; CONFIRMED once "Add to cart" is back."""
        flow = self.start_flow(f"remove_item_from_cart[{name}]")

        clicked = await self.click(
            self.remove_button(name),
            post_condition=ElementPresent(self.add_button(name)),
        )
        if not clicked.ok:
            return self.fail_flow(flow, clicked)
        return flow.confirm(clicked, value=name)

    @allure.step("Open cart")
    async def open_cart(self) -> Flow:
        """
        Click the cart link.

        Returns:
            CONFIRMED flow once the "Your Cart" header is present, with a
            CartPage for the same session in `flow.value`.
        """
        flow = self.start_flow("open_cart")

        clicked = await self.click(
            self.CART_LINK,
            post_condition=ElementPresent(CartPage.CART_HEADER),
        )
        if not clicked.ok:
            return self.fail_flow(flow, clicked)
        return flow.confirm(clicked, value=CartPage(self.driver, self.settings))


__all__ = [
    "InventoryPage",
]
