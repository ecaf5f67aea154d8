"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - Browser launch with a bounded startup time
    - Context isolation per test case
    - Flags that keep notification / password-manager noise down
    - Browser configuration presets

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .settings import UiSettings


class BrowserManager:
    """
    Manages browser instances and contexts for UI testing.

    Features:
        - One browser per manager, one context per page
        - Configurable browser type and headless mode
        - Launch bounded by startup_timeout_ms

    Usage:
        async with BrowserManager(settings) as manager:
            page = await manager.new_page()
            await page.goto("https://www.saucedemo.com/")
    """

    # Flags shared by every chromium launch
    CHROMIUM_ARGS: List[str] = [
        "--disable-infobars",
        "--disable-extensions",
        "--disable-popup-blocking",
        "--disable-notifications",
        "--disable-save-password-bubble",
        "--disable-password-manager-reauthentication",
        "--disable-features=PasswordManagerUI",
    ]

    # Extra chromium flags for headless runs
    HEADLESS_ARGS: List[str] = [
        "--disable-gpu",
        "--no-sandbox",
        "--disable-dev-shm-usage",
    ]

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }

    def __init__(self, settings: Optional[UiSettings] = None):
        """
        Initialize browser manager.

        Args:
            settings: Run settings (headless, browser type, startup timeout)
        """
        self.settings = settings or UiSettings()
        self.headless = self.settings.headless
        self.browser_type = self.settings.browser

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    def launch_options(self) -> Dict[str, Any]:
        """Build the launch options for the configured browser."""
        options: Dict[str, Any] = {
            "headless": self.headless,
            "timeout": self.settings.startup_timeout_ms,
        }
        if self.browser_type == "chromium":
            args = list(self.CHROMIUM_ARGS)
            if self.headless:
                args.extend(self.HEADLESS_ARGS)
            else:
                args.append("--start-maximized")
            options["args"] = args
        return options

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        # Select browser type
        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        logger.info(
            f"Running in {'HEADLESS' if self.headless else 'VISIBLE'} mode "
            f"({self.browser_type})"
        )
        try:
            self._browser = await browser_launcher.launch(**self.launch_options())
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise
        logger.debug(f"Browser started: {self.browser_type}")

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {**self.DEFAULT_CONTEXT_OPTIONS, **options}
        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)
        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            **context_options: Options for new context

        Returns:
            New Page
        """
        if context is None:
            context = await self.new_context(**context_options)

        return await context.new_page()


__all__ = [
    "BrowserManager",
]
