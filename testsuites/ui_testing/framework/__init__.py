"""
================================================================================
UI Testing Framework
================================================================================

Playwright (or Selenium) UI automation framework with resilient interactions.

Components:
    - locator / conditions: what to find and what to wait for
    - waiter: condition polling bounded by a Deadline
    - element_actions: interactions with pre/post-condition checks
    - interstitials: best-effort dismissal of alerts and browser prompts
    - retry: bounded constant-backoff retries
    - flow: page flow lifecycle (confirmed / failed)
    - page_base: base page object wiring the above together
    - driver / browser_manager: Playwright plumbing
    - selenium_driver: the same driver contract over Selenium Chrome
    - config_loader / settings: YAML + env configuration

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .conditions import (
    AlertPresent,
    AnyOf,
    Deadline,
    ElementAbsent,
    ElementEnabled,
    ElementPresent,
    ElementVisible,
    TitleContains,
    WaitCondition,
)
from .config_loader import ConfigLoader, ConfigurationError
from .driver import Action, ActionKind, BrowserDriver, PlaywrightDriver
from .element_actions import ActionExecutor
from .flow import Flow, FlowFailedError, FlowState, FlowStateError
from .interstitials import DismissalRule, InterstitialDismisser, LOGIN_INTERSTITIALS
from .locator import Locator, LocatorStrategy, xpath_literal
from .page_base import BasePage, PageBase
from .results import InteractionResult, ResultKind, SessionLostError, StaleElementError
from .retry import RetryPolicy, with_retry
from .selenium_driver import SeleniumDriver, start_selenium_driver
from .settings import UiSettings
from .waiter import Waiter

__all__ = [
    "Action",
    "ActionExecutor",
    "ActionKind",
    "AlertPresent",
    "AnyOf",
    "BasePage",
    "BrowserDriver",
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "Deadline",
    "DismissalRule",
    "ElementAbsent",
    "ElementEnabled",
    "ElementPresent",
    "ElementVisible",
    "Flow",
    "FlowFailedError",
    "FlowState",
    "FlowStateError",
    "InteractionResult",
    "InterstitialDismisser",
    "LOGIN_INTERSTITIALS",
    "Locator",
    "LocatorStrategy",
    "PageBase",
    "PlaywrightDriver",
    "ResultKind",
    "RetryPolicy",
    "SeleniumDriver",
    "SessionLostError",
    "StaleElementError",
    "TitleContains",
    "UiSettings",
    "Waiter",
    "start_selenium_driver",
    "with_retry",
    "xpath_literal",
]
