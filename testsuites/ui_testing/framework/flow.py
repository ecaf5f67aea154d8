"""
Page flow lifecycle.

A flow is one named, domain-level user operation (log in, add an item to
the cart, ...). It moves NOT_STARTED -> IN_PROGRESS -> CONFIRMED | FAILED.
CONFIRMED requires the operation's post-condition to have held; FAILED is
terminal and keeps the InteractionResult that caused it.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Any, Optional

from loguru import logger

from .results import InteractionResult


class FlowState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class FlowStateError(RuntimeError):
    """Raised on an illegal flow state transition."""
    pass


class FlowFailedError(AssertionError):
    """Raised by `Flow.raise_for_state()` when a flow did not confirm."""

    def __init__(self, flow: "Flow"):
        self.flow = flow
        super().__init__(flow.diagnostics())


_TRANSITIONS = {
    FlowState.NOT_STARTED: {FlowState.IN_PROGRESS},
    FlowState.IN_PROGRESS: {FlowState.CONFIRMED, FlowState.FAILED},
    FlowState.CONFIRMED: set(),
    FlowState.FAILED: set(),
}


class Flow:
    """
    State of one flow run.

    Attributes:
        name: Flow name, e.g. "add_item_to_cart[Sauce Labs Backpack]"
        state: Current FlowState
        result: InteractionResult that confirmed or failed the flow
        message: Extra failure context (e.g. an error banner read from the page)
        value: Domain value produced by the flow (e.g. the displayed item name)
    """

    def __init__(self, name: str):
        self.name = name
        self.state = FlowState.NOT_STARTED
        self.result: Optional[InteractionResult] = None
        self.message: str = ""
        self.value: Any = None
        self._started_at: Optional[float] = None
        self._finished_at: Optional[float] = None

    def _move(self, target: FlowState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise FlowStateError(
                f"Flow '{self.name}' cannot go from {self.state.value} to {target.value}"
            )
        self.state = target

    def start(self) -> "Flow":
        self._move(FlowState.IN_PROGRESS)
        self._started_at = time.monotonic()
        logger.info(f"▶ Flow started: {self.name}")
        return self

    def confirm(self, result: InteractionResult, value: Any = None) -> "Flow":
        self._move(FlowState.CONFIRMED)
        self._finished_at = time.monotonic()
        self.result = result
        if value is not None:
            self.value = value
        logger.info(f"✅ Flow confirmed: {self.name} ({self.elapsed_ms:.0f}ms)")
        return self

    def fail(self, result: InteractionResult, message: str = "") -> "Flow":
        self._move(FlowState.FAILED)
        self._finished_at = time.monotonic()
        self.result = result
        self.message = message
        logger.warning(f"❌ Flow failed: {self.diagnostics()}")
        return self

    @property
    def confirmed(self) -> bool:
        return self.state is FlowState.CONFIRMED

    @property
    def failed(self) -> bool:
        return self.state is FlowState.FAILED

    @property
    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._finished_at if self._finished_at is not None else time.monotonic()
        return (end - self._started_at) * 1000

    def diagnostics(self) -> str:
        text = f"Flow '{self.name}' {self.state.value} after {self.elapsed_ms:.0f}ms"
        if self.result is not None and not self.result.ok:
            text += f": {self.result.describe()}"
        if self.message:
            text += f" | page says: {self.message}"
        return text

    def raise_for_state(self) -> "Flow":
        """Return self if confirmed, otherwise raise FlowFailedError."""
        if not self.confirmed:
            raise FlowFailedError(self)
        return self

    def __repr__(self) -> str:
        return f"Flow(name={self.name!r}, state={self.state.value})"


__all__ = [
    "Flow",
    "FlowFailedError",
    "FlowState",
    "FlowStateError",
]
