# app/payments/amounts.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from settings import settings


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class AmountLimits:
    min_amount: float = 100
    max_amount: float = 10_000_000
    currency: str = "RWF"

    @classmethod
    def from_settings(cls) -> "AmountLimits":
        return cls(
            min_amount=settings.PAYMENT_MIN_AMOUNT,
            max_amount=settings.PAYMENT_MAX_AMOUNT,
            currency=(settings.PAYMENT_CURRENCY or "RWF").strip().upper(),
        )


def _as_number(amount: Any) -> Optional[Decimal]:
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, str):
        amount = amount.strip()
        if not amount:
            return None
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return None
    # NaN and infinities are not amounts; huge integers stay exact
    if not value.is_finite():
        return None
    return value


def _fmt(bound: float) -> str:
    # 10000000.0 -> "10000000"
    if float(bound).is_integer():
        return str(int(bound))
    return str(bound)


def validate_amount(amount: Any, limits: Optional[AmountLimits] = None) -> ValidationResult:
    limits = limits or AmountLimits.from_settings()

    value = _as_number(amount)
    if not value:
        return ValidationResult(valid=False, error="Invalid amount")

    if value < Decimal(str(limits.min_amount)):
        return ValidationResult(valid=False, error=f"Amount must be at least {_fmt(limits.min_amount)} {limits.currency}")

    if value > Decimal(str(limits.max_amount)):
        return ValidationResult(valid=False, error=f"Amount cannot exceed {_fmt(limits.max_amount)} {limits.currency}")

    return ValidationResult(valid=True)
