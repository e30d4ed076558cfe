"""
utils/retry.py — Bounded retry helper for async calls.

Uses tenacity under the hood. Each call gets its own AsyncRetrying
controller, so the attempt counter never leaks between concurrent calls.
Attempts are re-issued immediately; there is no wait between them.

Usage:
    from userposts.utils.retry import retry_async

    data = await retry_async(
        fetch_once, url,
        max_attempts=3,
        retry_on=(httpx.HTTPError,),
    )
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from userposts.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


async def retry_async(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int,
    retry_on: type[BaseException] | tuple[type[BaseException], ...],
    **kwargs: Any,
) -> T:
    """
    Await fn(*args, **kwargs), re-issuing it when it raises one of retry_on.

    Args:
        fn:           Coroutine function to call.
        max_attempts: Total attempts before the last error is re-raised.
        retry_on:     Exception type(s) that trigger a retry. Anything else
                      propagates on first occurrence.

    Returns:
        Whatever fn returns on the first successful attempt.

    Raises:
        ValueError: max_attempts is less than 1.
        The last retry_on exception once max_attempts is reached.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    attempt_log = log.bind(function=getattr(fn, "__qualname__", repr(fn)))

    def _log_retry(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        attempt_log.warning(
            "retry_attempt",
            attempt=retry_state.attempt_number + 1,
            max_attempts=max_attempts,
            last_error=str(outcome.exception()) if outcome else None,
        )

    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_none(),
            retry=retry_if_exception_type(retry_on),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                return await fn(*args, **kwargs)
    except retry_on as exc:
        attempt_log.error(
            "retry_exhausted",
            max_attempts=max_attempts,
            error=str(exc),
        )
        raise
    raise AssertionError("unreachable")  # pragma: no cover
