"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the Swag Labs pages.

Each page class encapsulates:
    - Element locators (static, or built from product names)
    - Page flows returning a confirmed / failed Flow
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .cart_page import CartPage
from .inventory_page import InventoryPage
from .login_page import LoginPage

__all__ = [
    "CartPage",
    "InventoryPage",
    "LoginPage",
]
