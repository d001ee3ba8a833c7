"""
Resilience patterns for outbound calls.

Provides the retry decorator the HTTP transport uses to ride out transient
news API failures (timeouts, dropped connections, 5xx).
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Retry Decorators
# -----------------------------------------------------------------------------


def compute_wait(attempt: int, min_wait: float, max_wait: float, backoff: float) -> float:
    """Wait before retrying after the given (1-based) failed attempt."""
    return min(min_wait * (backoff ** (attempt - 1)), max_wait)


def with_sync_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 30.0,
    backoff: float = 2.0,
    retry_exceptions: tuple[type[Exception], ...] = (Exception,),
    sleep: Callable[[float], None] | None = None,
) -> Callable:
    """
    Decorator for sync functions with retry.

    Args:
        max_attempts: Total number of attempts (first call included)
        min_wait: Wait before the first retry (seconds)
        max_wait: Upper bound on any single wait (seconds)
        backoff: Multiplier applied to the wait per attempt; 1.0 gives a flat interval
        retry_exceptions: Tuple of exception types to retry on
        sleep: Sleep function (defaults to time.sleep, looked up per call)

    Usage:
        @with_sync_retry(max_attempts=3, min_wait=0.1, backoff=1.0,
                         retry_exceptions=(httpx.TransportError,))
        def get(url: str) -> httpx.Response:
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None

            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except retry_exceptions as e:
                    last_exception = e
                    if attempt == max_attempts:
                        logger.error(f"{func.__name__} failed after {max_attempts} attempts: {e}")
                        raise

                    wait_time = compute_wait(attempt, min_wait, max_wait, backoff)
                    logger.warning(
                        f"{func.__name__} attempt {attempt} failed: {e}. Retrying in {wait_time:.2f}s...",
                        extra={"event": "retry", "attempt": attempt},
                    )
                    (sleep or time.sleep)(wait_time)

            if last_exception:
                raise last_exception
            raise RuntimeError(f"{func.__name__} failed without exception")

        return wrapper

    return decorator
