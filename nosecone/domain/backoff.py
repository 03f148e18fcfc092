"""Exponential backoff for async operations."""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from nosecone.infrastructure import log

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0  # seconds


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
) -> T:
    """Await ``operation()`` until it succeeds or the retry budget runs out.

    Makes at most ``max_retries + 1`` attempts. After failed attempt ``i``
    (0-based) it sleeps ``base_delay * 2**i`` seconds, so the defaults wait
    1s, 2s and 4s. The last failure is re-raised unchanged.
    """
    if max_retries < 0:
        raise ValueError("max_retries must be >= 0")

    last_error: Optional[Exception] = None
    for attempt in range(max_retries + 1):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            if attempt == max_retries:
                break
            delay = base_delay * (2 ** attempt)
            log.debug(f"attempt {attempt + 1}/{max_retries + 1} failed ({e}), retrying in {delay:g}s")
            await asyncio.sleep(delay)

    raise last_error
