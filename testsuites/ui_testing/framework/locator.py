"""
================================================================================
Locator
================================================================================

Immutable description of how to find an element: a selector strategy plus a
selector string.

Page flows declare their locators as class attributes or build them from
product names at call time. The Playwright selector string is derived from
the strategy, so the rest of the framework never deals with raw prefixes.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LocatorStrategy(str, Enum):
    """Supported selector strategies."""

    ID = "id"
    CSS = "css"
    XPATH = "xpath"


@dataclass(frozen=True)
class Locator:
    """
    How to find an element.

    Attributes:
        strategy: Selector strategy
        value: Selector string for the strategy
        name: Optional human-readable element name for logs and reports

    Usage:
        >>> Locator.by_id("login-button").selector
        'id=login-button'
        >>> Locator.css("a.shopping_cart_link").selector
        'css=a.shopping_cart_link'
    """

    strategy: LocatorStrategy
    value: str
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Locator value must be a non-empty string")

    @classmethod
    def by_id(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.ID, value, name)

    @classmethod
    def css(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.CSS, value, name)

    @classmethod
    def xpath(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.XPATH, value, name)

    @property
    def selector(self) -> str:
        """Playwright selector string (``id=``, ``css=`` or ``xpath=`` engine)."""
        return f"{self.strategy.value}={self.value}"

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} <{self.selector}>"
        return self.selector


def xpath_literal(text: str) -> str:
    """
    Quote arbitrary text as an XPath string literal.

    XPath 1.0 has no escape sequences, so text containing both quote kinds
    is split and joined with ``concat()``.
    """
    if '"' not in text:
        return f'"{text}"'
    if "'" not in text:
        return f"'{text}'"
    parts = text.split('"')
    pieces = []
    for index, part in enumerate(parts):
        if part:
            pieces.append(f'"{part}"')
        if index < len(parts) - 1:
            pieces.append("'\"'")
    return f"concat({', '.join(pieces)})"


__all__ = [
    "Locator",
    "LocatorStrategy",
    "xpath_literal",
]
