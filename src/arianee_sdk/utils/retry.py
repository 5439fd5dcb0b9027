"""
Retry strategies using Tenacity.

Bounded exponential backoff for idempotent HTTP fetches. Chain writes are
never retried: resubmitting a transaction is unsafe.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from arianee_sdk.core.exceptions import FetchTimeoutError
from arianee_sdk.core.logging import get_logger

logger = get_logger("retry")


def is_transient_error(exception: BaseException) -> bool:
    """Network-level failures worth another attempt."""
    if isinstance(exception, (FetchTimeoutError, httpx.TransportError)):
        return True
    msg = str(exception).lower()
    return any(x in msg for x in ("timeout", "timed out", "connection refused", "network error"))


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(f"Retrying fetch (attempt {retry_state.attempt_number}): {exc}")


async def execute_with_retry(
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    retries: int = 3,
    min_wait: float = 1.0,
    factor: float = 2.0,
    **kwargs: Any,
) -> Any:
    """
    Await `func(*args, **kwargs)`, retrying transient failures.

    Waits `min_wait`, `min_wait * factor`, ... between attempts and makes
    at most `retries + 1` attempts before re-raising the last error.
    """
    async for attempt in AsyncRetrying(
        retry=retry_if_exception(is_transient_error),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, exp_base=factor),
        stop=stop_after_attempt(retries + 1),
        before_sleep=_log_retry,
        reraise=True,
    ):
        with attempt:
            return await func(*args, **kwargs)
