"""Retry decorator for transient LLM provider failures."""

import functools
import logging
import time
from collections.abc import Callable
from typing import TypeVar

import requests

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


def is_retryable(exc: BaseException) -> bool:
    """Whether a request exception is worth another attempt."""
    if isinstance(exc, requests.HTTPError):
        response = exc.response
        return response is not None and response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, (requests.ConnectionError, requests.Timeout))


def with_retry(
    max_attempts: int = 3,
    backoff_factor: float = 2.0,
    initial_delay: float = 1.0,
    retryable: Callable[[BaseException], bool] = is_retryable,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry the decorated callable with exponential backoff.

    Args:
        max_attempts: Attempts including the first call.
        backoff_factor: Multiplier applied to the delay after each failure.
        initial_delay: Delay in seconds before the second attempt.
        retryable: Predicate deciding whether an exception triggers a retry.
        sleep: Sleep function, replaceable in tests.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            delay = initial_delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if attempt >= max_attempts or not retryable(e):
                        raise
                    logger.warning(
                        "%s failed (attempt %d/%d): %s; retrying in %.1fs",
                        func.__name__,
                        attempt,
                        max_attempts,
                        e,
                        delay,
                    )
                    sleep(delay)
                    delay *= backoff_factor
            raise RuntimeError("unreachable")

        return wrapper

    return decorator


__all__ = ["with_retry", "is_retryable", "RETRYABLE_STATUS_CODES"]
