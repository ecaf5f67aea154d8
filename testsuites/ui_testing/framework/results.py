"""
================================================================================
Interaction Results
================================================================================

Outcome taxonomy shared by the waiter, the action executor, the retry policy
and the page flows.

Expected "not there (yet)" situations are values, not exceptions:

    SUCCESS          condition held / action done (optional value)
    NOT_FOUND        element never appeared
    TIMEOUT          deadline elapsed waiting on a condition
    TRANSIENT_ERROR  session or driver fault, never retried

Only the driver layer raises, and only for infrastructure faults
(`SessionLostError`) or a detached element (`StaleElementError`).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .conditions import WaitCondition
    from .locator import Locator


class SessionLostError(Exception):
    """Raised by a driver when the browser session is closed or unusable."""
    pass


class StaleElementError(Exception):
    """Raised by a driver when an element handle is no longer attached to the DOM."""
    pass


class ResultKind(str, Enum):
    """Discriminator for `InteractionResult`."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    TRANSIENT_ERROR = "transient_error"


@dataclass(frozen=True)
class InteractionResult:
    """
    Outcome of a single core operation.

    Attributes:
        kind: Outcome discriminator
        value: Payload on success (element handle, text, title, ...)
        cause: Exception behind a transient error, or the last swallowed
            driver error behind a timeout
        locator: Locator the operation targeted, if any
        condition: Condition that was being awaited, if any
        elapsed_ms: Time spent in the operation
    """

    kind: ResultKind
    value: Any = None
    cause: Optional[BaseException] = None
    locator: Optional["Locator"] = None
    condition: Optional["WaitCondition"] = None
    elapsed_ms: float = 0.0

    @classmethod
    def success(cls, value: Any = None, **context: Any) -> "InteractionResult":
        return cls(ResultKind.SUCCESS, value=value, **context)

    @classmethod
    def not_found(cls, **context: Any) -> "InteractionResult":
        return cls(ResultKind.NOT_FOUND, **context)

    @classmethod
    def timeout(cls, **context: Any) -> "InteractionResult":
        return cls(ResultKind.TIMEOUT, **context)

    @classmethod
    def transient(cls, cause: BaseException, **context: Any) -> "InteractionResult":
        return cls(ResultKind.TRANSIENT_ERROR, cause=cause, **context)

    @property
    def ok(self) -> bool:
        return self.kind is ResultKind.SUCCESS

    @property
    def retryable(self) -> bool:
        """Content not ready yet, as opposed to success or an infrastructure fault."""
        return self.kind in (ResultKind.NOT_FOUND, ResultKind.TIMEOUT)

    def describe(self) -> str:
        """One-line diagnostic: what was awaited, on which element, for how long."""
        parts = [self.kind.value.upper().replace("_", " ")]
        if self.condition is not None:
            parts.append(f"waiting for {self.condition.describe()}")
        elif self.locator is not None:
            parts.append(f"on {self.locator}")
        parts.append(f"after {self.elapsed_ms:.0f}ms")
        text = " ".join(parts)
        if self.cause is not None:
            text += f" ({type(self.cause).__name__}: {str(self.cause)[:200]})"
        return text


__all__ = [
    "InteractionResult",
    "ResultKind",
    "SessionLostError",
    "StaleElementError",
]
