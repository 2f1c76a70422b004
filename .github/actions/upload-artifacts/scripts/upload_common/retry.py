"""Retry helper for flaky network operations."""

from __future__ import annotations

import sys
import time
import typing as typ

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

__all__ = ["MAX_ATTEMPTS", "retry"]

T = typ.TypeVar("T")

MAX_ATTEMPTS = 5


def retry(
    operation: typ.Callable[[], T],
    *,
    description: str,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    max_attempts: int = MAX_ATTEMPTS,
    sleep: typ.Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation`` until it succeeds or ``max_attempts`` is reached.

    The wait between attempts grows linearly: one second after the first
    failure, two after the second, and so on.

    Parameters
    ----------
    operation:
        Zero-argument callable performing the work.
    description:
        Human readable command echoed before the first attempt.
    retry_on:
        Exception types that trigger another attempt. Anything else
        propagates immediately.
    max_attempts:
        Total number of tries, including the first.
    sleep:
        Function used to wait between attempts.

    Returns
    -------
    T
        Whatever ``operation`` returns on its first successful attempt.

    Raises
    ------
    BaseException
        The last error raised by ``operation`` once attempts are exhausted.
    """
    print(f"Attempting with retry: {description}")

    def _announce_retry(state: RetryCallState) -> None:
        print(
            f"Command failed. Attempt {state.attempt_number + 1}/{max_attempts}:",
            file=sys.stderr,
        )

    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_incrementing(start=1, increment=1),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_announce_retry,
        sleep=sleep,
        reraise=True,
    )
    try:
        return retrying(operation)
    except retry_on:
        attempts = retrying.statistics.get("attempt_number", max_attempts)
        print(f"The command has failed after {attempts} attempts.", file=sys.stderr)
        raise
