# ================================================================================
# Retry Policy Module
# ================================================================================
#
# Bounded, constant-backoff retries around a fallible interaction.
#
# Retry rules:
#   - SUCCESS short-circuits
#   - NOT_FOUND / TIMEOUT are retried after `backoff_ms` until attempts run out,
#     then the last result is returned verbatim
#   - TRANSIENT_ERROR is returned after the attempt that produced it; a dead
#     session cannot be retried back to life
#
# Usage:
#   policy = RetryPolicy(max_attempts=3, backoff_ms=500)
#   result = await with_retry(lambda: actions.perform(loc, Action.read_text()), policy)
#
# ================================================================================

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from loguru import logger

from .results import InteractionResult


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts (>= 1)
        backoff_ms: Constant delay between attempts (>= 0)
    """

    max_attempts: int = 3
    backoff_ms: int = 500

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.backoff_ms < 0:
            raise ValueError(f"backoff_ms must be >= 0, got {self.backoff_ms}")


async def with_retry(
    operation: Callable[[], Awaitable[InteractionResult]],
    policy: RetryPolicy,
    description: Optional[str] = None,
) -> InteractionResult:
    """
    Run `operation` until it succeeds, fails fast, or attempts are exhausted.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        policy: Attempts and backoff
        description: Name used in log lines

    Returns:
        The first SUCCESS, the first TRANSIENT_ERROR, or the last result.
    """
    description = description or getattr(operation, "__name__", "operation")
    result: Optional[InteractionResult] = None

    for attempt in range(1, policy.max_attempts + 1):
        result = await operation()

        if result.ok:
            if attempt > 1:
                logger.info(f"{description} succeeded on attempt {attempt}/{policy.max_attempts}")
            return result

        if not result.retryable:
            logger.error(f"{description} hit a transient error, not retrying: {result.describe()}")
            return result

        if attempt < policy.max_attempts:
            logger.warning(
                f"Attempt {attempt}/{policy.max_attempts} failed for {description}: "
                f"{result.describe()}. Retrying in {policy.backoff_ms}ms..."
            )
            await asyncio.sleep(policy.backoff_ms / 1000)

    logger.error(
        f"All {policy.max_attempts} attempts failed for {description}: {result.describe()}"
    )
    return result


__all__ = [
    "RetryPolicy",
    "with_retry",
]
