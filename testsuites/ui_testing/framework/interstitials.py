"""
================================================================================
Interstitial Dismisser
================================================================================

Best-effort dismissal of unsolicited UI that can pop up after an action:
JavaScript alerts, the browser's save-password bubble, and the Google
Password Manager "password found in a data breach" warning.

Rules are static and tried in order; the first rule whose detector fires and
whose dismissal succeeds wins. Nothing here ever raises: a rule that errors
is logged and skipped, so the calling flow can always carry on.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from loguru import logger

from .conditions import AlertPresent, Deadline, ElementPresent, WaitCondition
from .driver import Action
from .element_actions import ActionExecutor
from .locator import Locator, xpath_literal
from .waiter import Waiter


@dataclass(frozen=True)
class DismissalRule:
    """
    How to recognise and get rid of one kind of interstitial.

    Attributes:
        name: Rule name for logs
        detector: Condition that signals the interstitial is showing
        candidates: Elements to click, tried in order
        accept_dialog: Accept the pending JavaScript dialog instead of clicking
    """

    name: str
    detector: WaitCondition
    candidates: Tuple[Locator, ...] = ()
    accept_dialog: bool = False


class InterstitialDismisser:
    """
    Runs dismissal rules against one browser session.

    Usage:
        dismisser = InterstitialDismisser(actions)
        dismissed = await dismisser.dismiss_if_present(LOGIN_INTERSTITIALS, timeout_ms=1000)
    """

    # Pause after a dismissal so the page can settle
    SETTLE_MS = 300

    # Timeout for clicking a single candidate once a detector fired
    CANDIDATE_TIMEOUT_MS = 500

    def __init__(self, actions: ActionExecutor):
        self.actions = actions
        self.waiter: Waiter = actions.waiter
        self.driver = actions.driver

    async def dismiss_if_present(
        self,
        rules: Sequence[DismissalRule],
        timeout_ms: int = 1000,
    ) -> bool:
        """
        Try each rule in order.

        Args:
            rules: Ordered dismissal rules
            timeout_ms: Detection timeout per rule

        Returns:
            True if an interstitial was dismissed, False otherwise.
        """
        for rule in rules:
            try:
                if await self._apply(rule, timeout_ms):
                    return True
            except Exception as e:
                logger.debug(f"Interstitial rule '{rule.name}' errored, skipping: {e}")
        return False

    async def _apply(self, rule: DismissalRule, timeout_ms: int) -> bool:
        deadline = Deadline(timeout_ms, min(self.waiter.default_deadline.poll_interval_ms, timeout_ms))
        detected = await self.waiter.wait(rule.detector, deadline)
        if not detected.ok:
            logger.debug(f"Interstitial '{rule.name}' not present")
            return False

        logger.info(f"Interstitial '{rule.name}' detected")

        if rule.accept_dialog:
            logger.info(f"Accepting dialog: {detected.value}")
            await self.driver.accept_alert()
            await asyncio.sleep(self.SETTLE_MS / 1000)
            return True

        candidate_deadline = Deadline(
            self.CANDIDATE_TIMEOUT_MS,
            min(self.waiter.default_deadline.poll_interval_ms, self.CANDIDATE_TIMEOUT_MS),
        )
        for candidate in rule.candidates:
            try:
                clicked = await self.actions.perform(candidate, Action.click(), candidate_deadline)
            except Exception as e:
                logger.debug(f"Candidate {candidate} errored: {e}")
                continue
            if clicked.ok:
                logger.info(f"Dismissed '{rule.name}' via {candidate}")
                await asyncio.sleep(self.SETTLE_MS / 1000)
                return True

        logger.debug(f"Interstitial '{rule.name}' detected but no candidate could be clicked")
        return False


# =============================================================================
# Rule Tables
# =============================================================================

def _button_xpath(label: str, scope: str = "") -> str:
    literal = xpath_literal(label)
    return f"{scope}//button[contains(normalize-space(.), {literal}) or @aria-label={literal}]"


def _button_candidates(labels: Iterable[str], scope: str = "") -> Tuple[Locator, ...]:
    return tuple(
        Locator.xpath(_button_xpath(label, scope), name=f"'{label}' button")
        for label in labels
    )


ALERT_RULE = DismissalRule(
    name="javascript_alert",
    detector=AlertPresent(),
    accept_dialog=True,
)

_PASSWORD_MANAGER_CANDIDATES: Tuple[Locator, ...] = tuple(
    Locator.xpath(f"//button[@aria-label={xpath_literal(label)}]", name=f"'{label}' button")
    for label in ("Close", "Not now", "Dismiss", "OK", "Cancel")
) + tuple(
    Locator.xpath(f"//button[normalize-space(.)={xpath_literal(label)}]", name=f"'{label}' button")
    for label in ("Not now", "No thanks", "Never")
)

PASSWORD_MANAGER_RULE = DismissalRule(
    name="password_manager_prompt",
    detector=ElementPresent(
        Locator.xpath(
            " | ".join(c.value for c in _PASSWORD_MANAGER_CANDIDATES),
            name="password manager prompt",
        )
    ),
    candidates=_PASSWORD_MANAGER_CANDIDATES,
)

_BREACH_WARNING_XPATH = (
    "//*[contains(., 'The password you just used was found in a data breach')"
    " or contains(., 'Google Password Manager recommends changing your password')"
    " or (contains(., 'Google Password Manager') and contains(., 'data breach'))]"
)

_BREACH_BUTTON_LABELS = ("OK", "Not now", "Dismiss", "Close", "Maybe later", "Later")

BREACHED_PASSWORD_RULE = DismissalRule(
    name="breached_password_warning",
    detector=ElementPresent(Locator.xpath(_BREACH_WARNING_XPATH, name="breached password warning")),
    candidates=_button_candidates(_BREACH_BUTTON_LABELS, scope=_BREACH_WARNING_XPATH)
    + _button_candidates(_BREACH_BUTTON_LABELS),
)

# Order matters: a pending dialog blocks the page, so it goes first
LOGIN_INTERSTITIALS: Tuple[DismissalRule, ...] = (
    ALERT_RULE,
    PASSWORD_MANAGER_RULE,
    BREACHED_PASSWORD_RULE,
)


__all__ = [
    "ALERT_RULE",
    "BREACHED_PASSWORD_RULE",
    "DismissalRule",
    "InterstitialDismisser",
    "LOGIN_INTERSTITIALS",
    "PASSWORD_MANAGER_RULE",
]
