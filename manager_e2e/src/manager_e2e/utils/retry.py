"""Retry helpers for flaky browser operations."""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from manager_e2e.core.exceptions import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try and how long to wait in between.

    The wait before retry ``n`` (0-indexed) is ``delay * factor**n``, capped
    at ``max_delay`` and spread by ``jitter``. ``factor=1`` waits a constant
    ``delay``.

    Attributes:
        attempts: Total number of calls, including the first one
        delay: Wait before the first retry, in seconds
        factor: Growth of the wait per retry
        max_delay: Upper bound of a single wait
        jitter: Fraction of the wait added or removed at random
    """

    attempts: int = 3
    delay: float = 1.0
    factor: float = 2.0
    max_delay: float = 30.0
    jitter: float = 0.0

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {self.attempts}")

    def delay_for(self, retry: int) -> float:
        delay = min(self.delay * self.factor**retry, self.max_delay)
        if self.jitter > 0:
            spread = delay * self.jitter
            delay += random.uniform(-spread, spread)
        return max(0.0, delay)


def retry_call(
    func: Callable[[], T],
    policy: RetryPolicy = RetryPolicy(),
    retry_on: tuple[type[Exception], ...] = (Exception,),
    should_retry: Callable[[Exception], bool] | None = None,
    on_retry: Callable[[int, Exception, float], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``func`` until it succeeds or ``policy.attempts`` is used up.

    Args:
        func: Operation to run
        policy: Attempt count and wait schedule
        retry_on: Exception types that may be retried
        should_retry: Further filter on a caught exception; rejected ones propagate
        on_retry: Called with (retry index, exception, delay) before each wait
        sleep: Waits the given number of seconds; browser code passes the
            page's own timer

    Returns:
        Result of the first successful call

    Raises:
        RetryExhaustedError: If every attempt failed with a retryable error
    """
    retry = 0
    while True:
        try:
            return func()
        except retry_on as e:
            if should_retry is not None and not should_retry(e):
                raise
            if retry + 1 >= policy.attempts:
                logger.warning(f"Giving up after {policy.attempts} attempts: {e}")
                raise RetryExhaustedError(
                    message=f"Gave up after {policy.attempts} attempts: {e}",
                    attempts=policy.attempts,
                    last_error=e,
                    details={"last_error_type": type(e).__name__},
                ) from e

            delay = policy.delay_for(retry)
            logger.info(f"Attempt {retry + 1} failed: {e}. Retrying in {delay:.2f}s...")
            if on_retry:
                on_retry(retry, e, delay)
            sleep(delay)
            retry += 1
