# app/payments/polling.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from app.payments.expiry import compute_timeout
from app.payments.status import is_final_status
from settings import settings

logger = logging.getLogger("buildmart.payments")

TIMEOUT = "TIMEOUT"


@dataclass(frozen=True)
class PollOutcome:
    success: bool
    status: str  # COMPLETED | FAILED | TIMEOUT
    reference: str
    attempts: int
    transaction_id: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None


def poll_payment_status(
    check: Callable[[str], Any],
    reference: str,
    *,
    timeout_minutes: Optional[float] = None,
    interval_s: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PollOutcome:
    """
    Call check(reference) until it reports COMPLETED or FAILED, or the attempt
    budget derived from the payment timeout runs out.

    check must return an object with status / transaction_id / reason attributes
    (CollectionResult does).
    """
    if timeout_minutes is None:
        timeout_minutes = settings.PAYMENT_TIMEOUT_MINUTES
    if interval_s is None:
        interval_s = settings.PAYMENT_STATUS_CHECK_INTERVAL_S

    budget = compute_timeout(timeout_minutes).max_polling_attempts
    attempts = 0

    while attempts < budget:
        attempts += 1
        result = check(reference)
        status = getattr(result, "status", None)

        if is_final_status(status):
            logger.info("payment poll finished reference=%s status=%s attempts=%s", reference, status, attempts)
            return PollOutcome(
                success=status == "COMPLETED",
                status=status,
                reference=reference,
                attempts=attempts,
                transaction_id=getattr(result, "transaction_id", None),
                reason=getattr(result, "reason", None),
            )

        if attempts < budget:
            sleep(interval_s)

    logger.warning("payment poll timed out reference=%s attempts=%s", reference, attempts)
    return PollOutcome(
        success=False,
        status=TIMEOUT,
        reference=reference,
        attempts=attempts,
        message="Payment request timed out",
    )
