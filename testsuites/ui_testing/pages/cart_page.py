"""
================================================================================
Cart Page Object (Async)
================================================================================

The "Your Cart" page reached from the inventory's cart link.

================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.driver import Action
from testsuites.ui_testing.framework.locator import Locator, xpath_literal
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.results import StaleElementError


class CartPage(PageBase):
    """Cart page object (async)."""

    URL_PATH = "/cart.html"

    CART_HEADER = Locator.xpath(
        "//div[@class='header_secondary_container']/span[text()='Your Cart']",
        name="'Your Cart' header",
    )
    CART_ITEM_NAMES = Locator.xpath(
        "//div[@class='cart_item']//div[contains(@class,'inventory_item_name')]",
        name="cart item names",
    )

    @classmethod
    def cart_item_name(cls, position: int) -> Locator:
        """Name of the `position`-th listed item, counting from 1."""
        return Locator.xpath(f"({cls.CART_ITEM_NAMES.value})[{position}]", name=f"cart item name #{position}")

    @staticmethod
    def cart_item(name: str) -> Locator:
        return Locator.xpath(
            f"//div[@class='cart_item']//div[text()={xpath_literal(name)}]",
            name=f"cart item '{name}'",
        )

    @allure.step("Verify cart page is displayed")
    async def is_at_cart_page(self, timeout_ms: Optional[int] = None) -> bool:
        at_cart = await self.is_present(self.CART_HEADER, timeout_ms)
        logger.info(f"On cart page: {at_cart}")
        return at_cart

    @allure.step("Check '{name}' is in the cart")
    async def is_item_in_cart(self, name: str, timeout_ms: Optional[int] = None) -> bool:
        """True once an item named `name` is listed; False when the wait times out."""
        in_cart = await self.is_present(self.cart_item(name), timeout_ms)
        logger.info(f"Item '{name}' in cart: {in_cart}")
        return in_cart

    async def item_names(self) -> List[str]:
        """Names of every listed item, in page order. Empty when the cart is empty."""
        if not await self.is_at_cart_page():
            return []
        try:
            count = len(await self.driver.locate_all(self.CART_ITEM_NAMES))
        except StaleElementError as e:
            logger.warning(f"Cart list re-rendered while counting items: {e}")
            return []

        names = []
        for position in range(1, count + 1):
            result = await self.actions.perform(self.cart_item_name(position), Action.read_text())
            if not result.ok:
                logger.warning(f"Stopped reading cart items at #{position}: {result.describe()}")
                break
            names.append(result.value.strip())
        return names


__all__ = [
    "CartPage",
]
