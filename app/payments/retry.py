# app/payments/retry.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from app.payments.base import ProviderError
from settings import settings

logger = logging.getLogger("buildmart.payments")

T = TypeVar("T")

DEFAULT_BASE_DELAY_MS = 1000
MAX_BACKOFF_MS = 30000


@dataclass(frozen=True)
class RetryPolicy:
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS
    max_delay_ms: int = MAX_BACKOFF_MS
    max_attempts: int = 3

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            base_delay_ms=int(settings.RETRY_BASE_DELAY_MS),
            max_delay_ms=int(settings.RETRY_MAX_DELAY_MS),
            max_attempts=int(settings.PAYMENT_RETRY_ATTEMPTS),
        )


def backoff_delay(retry_count: int, base_delay: int = DEFAULT_BASE_DELAY_MS, *, max_delay: int = MAX_BACKOFF_MS) -> int:
    # 1s, 2s, 4s, 8s, 16s, then capped at 30s
    if retry_count < 0:
        raise ValueError(f"retry_count must be >= 0, got {retry_count}")
    return int(min((2 ** retry_count) * base_delay, max_delay))


def is_retryable(error: ProviderError) -> bool:
    # no response at all => network level failure
    if error.response is None:
        return True

    status = error.response.status
    if status >= 500:
        return True
    if status == 429:
        return True
    if status == 504:
        return True
    return False


def retry_call(
    fn: Callable[[], T],
    *,
    policy: Optional[RetryPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
    label: str = "provider call",
) -> T:
    """
    Run fn, retrying transient ProviderErrors with exponential backoff.

    Non-retryable errors and the failure of the last attempt propagate unchanged.
    """
    policy = policy or RetryPolicy.from_settings()
    attempt = 0
    while True:
        try:
            return fn()
        except ProviderError as err:
            attempt += 1
            if attempt >= policy.max_attempts or not is_retryable(err):
                raise
            delay_ms = backoff_delay(attempt - 1, policy.base_delay_ms, max_delay=policy.max_delay_ms)
            logger.warning(
                "%s failed attempt=%s/%s status=%s code=%s retry_in_ms=%s",
                label,
                attempt,
                policy.max_attempts,
                err.response.status if err.response else None,
                err.code,
                delay_ms,
            )
            sleep(delay_ms / 1000.0)
