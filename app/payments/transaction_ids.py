# app/payments/transaction_ids.py
from __future__ import annotations

import secrets
import string
import time
from typing import Optional

from settings import settings


_BASE36 = string.digits + string.ascii_uppercase
RANDOM_SUFFIX_LEN = 6


def _now_ms() -> int:
    return int(time.time() * 1000)


def _random_suffix(length: int = RANDOM_SUFFIX_LEN) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_transaction_id(order_id: str, provider: str = "payment", *, prefix: Optional[str] = None) -> str:
    """
    Build a traceable reference: PREFIX-PROVIDER-TIMESTAMPMS-ORDERID-RANDOM.

    Unique enough within a process (millisecond clock plus 36**6 random suffixes),
    not a cryptographic guarantee.
    """
    tag = (prefix or settings.PAYMENT_TXN_PREFIX or "").strip()
    provider_tag = (provider or "payment").strip().upper()
    return f"{tag}-{provider_tag}-{_now_ms()}-{order_id}-{_random_suffix()}"
