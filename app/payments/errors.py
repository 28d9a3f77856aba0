# app/payments/errors.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from app.payments.base import ProviderError
from app.payments.retry import is_retryable


# Order matters: first matching phrase wins.
ERROR_MESSAGES: tuple[tuple[str, str], ...] = (
    ("insufficient funds", "Insufficient funds in your mobile money account"),
    ("invalid msisdn", "Invalid phone number"),
    ("timeout", "Payment request timed out. Please try again."),
    ("not authorized", "Payment authorization failed"),
    ("transaction not found", "Transaction not found"),
    ("duplicate transaction", "Duplicate payment request detected"),
)

GENERIC_ERROR_MESSAGE = "Payment processing failed. Please try again or contact support."
UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True)
class ErrorDetails:
    message: str
    code: Optional[str]
    status_code: Optional[int]
    timestamp: str
    retryable: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def sanitize_error_message(error_message: Optional[str]) -> str:
    lower = (error_message or "").lower()
    for phrase, friendly in ERROR_MESSAGES:
        if phrase in lower:
            return friendly
    return GENERIC_ERROR_MESSAGE


def _body(error: ProviderError) -> dict[str, Any]:
    if error.response is None:
        return {}
    return error.response.data or {}


def resolve_error_message(error: ProviderError) -> str:
    """response body message -> error message -> "Unknown error"."""
    body_message = _body(error).get("message")
    if body_message:
        return str(body_message)
    if error.message:
        return error.message
    return UNKNOWN_ERROR


def resolve_error_code(error: ProviderError) -> Optional[str]:
    body_code = _body(error).get("code")
    if body_code:
        return str(body_code)
    return error.code or None


def describe_error(error: ProviderError) -> ErrorDetails:
    return ErrorDetails(
        message=resolve_error_message(error),
        code=resolve_error_code(error),
        status_code=error.response.status if error.response is not None else None,
        timestamp=datetime.now(timezone.utc).isoformat(),
        retryable=is_retryable(error),
    )
