# app/payments/expiry.py
from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

# provider status is checked every 5 seconds
POLL_INTERVAL_SECONDS = 5
DEFAULT_TIMEOUT_MINUTES = 3


@dataclass(frozen=True)
class TimeoutSpec:
    expires_at: int  # epoch millis
    expires_in_seconds: int
    max_polling_attempts: int


def _now_ms() -> int:
    return int(time.time() * 1000)


def _parse_iso(value: str) -> Optional[datetime]:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _to_epoch_ms(value: Union[datetime, str, int, float, None]) -> Optional[int]:
    """Epoch millis for a datetime, ISO-8601 string or epoch-millis number; None if unusable."""
    if isinstance(value, str):
        value = _parse_iso(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None


def is_expired(
    created_at: Union[datetime, str, int, float, None],
    timeout_minutes: float = DEFAULT_TIMEOUT_MINUTES,
) -> bool:
    created_ms = _to_epoch_ms(created_at)
    # unreadable timestamps never count as expired
    if created_ms is None:
        return False
    expiry_ms = created_ms + int(timeout_minutes * 60 * 1000)
    return _now_ms() > expiry_ms


def compute_timeout(timeout_minutes: float = DEFAULT_TIMEOUT_MINUTES) -> TimeoutSpec:
    now = _now_ms()
    expires_in = int(timeout_minutes * 60)
    return TimeoutSpec(
        expires_at=now + int(timeout_minutes * 60 * 1000),
        expires_in_seconds=expires_in,
        max_polling_attempts=expires_in // POLL_INTERVAL_SECONDS,
    )
