"""Exponential backoff retry for transient Gemini API errors.

Retries only happen when the caller's policy allows more than one attempt;
the default policy is a single attempt.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RETRYABLE_PATTERNS: tuple[str, ...] = (
    "429",
    "quota",
    "resource_exhausted",
    "timeout",
    "timed out",
    "503",
    "service unavailable",
)


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts to make and how long to wait between them."""

    max_attempts: int = 1
    base_delay: float = 1.0
    max_delay: float = 30.0


def _is_retryable(exc: Exception) -> bool:
    """Check if an exception is a timeout or matches known transient patterns."""
    if isinstance(exc, TimeoutError):
        return True
    msg = str(exc).lower()
    return any(p in msg for p in _RETRYABLE_PATTERNS)


async def with_retry(
    coro_factory: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
) -> T:
    """Execute an async callable with exponential backoff on transient errors.

    Args:
        coro_factory: Zero-arg callable that returns a fresh awaitable each attempt.
        policy: Attempt/delay limits. Defaults to a single attempt.

    Returns:
        The result of the first successful call.

    Raises:
        The last exception if all attempts are exhausted or non-retryable.
    """
    policy = policy or RetryPolicy()
    max_attempts = max(1, policy.max_attempts)

    last_exc: Exception | None = None
    for attempt in range(max_attempts):
        try:
            return await coro_factory()
        except Exception as exc:
            last_exc = exc
            if not _is_retryable(exc) or attempt == max_attempts - 1:
                raise
            delay = min(policy.base_delay * (2 ** attempt) + random.random(), policy.max_delay)
            logger.warning(
                "Retry %d/%d after %.1fs: %s", attempt + 1, max_attempts, delay, exc,
            )
            await asyncio.sleep(delay)
    raise last_exc  # unreachable but satisfies type checker
