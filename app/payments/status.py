# app/payments/status.py
from __future__ import annotations

from enum import Enum


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


STATUS_MAP: dict[str, dict[str, PaymentStatus]] = {
    "mtn": {
        "PENDING": PaymentStatus.PENDING,
        "SUCCESSFUL": PaymentStatus.COMPLETED,
        "FAILED": PaymentStatus.FAILED,
    },
    "airtel": {
        "TP": PaymentStatus.PENDING,  # transaction pending
        "TS": PaymentStatus.COMPLETED,  # transaction successful
        "TF": PaymentStatus.FAILED,  # transaction failed
        "TIP": PaymentStatus.PENDING,  # transaction in progress
    },
}

FINAL_STATUSES = {PaymentStatus.COMPLETED.value, PaymentStatus.FAILED.value}


def map_payment_status(status: str, provider: str) -> str:
    """
    Translate a provider status code to PENDING / COMPLETED / FAILED.

    Unknown providers or codes come back unchanged so callers still see them.
    """
    table = STATUS_MAP.get((provider or "").strip().lower(), {})
    mapped = table.get(status)
    if mapped is None:
        return status
    return mapped.value


def is_final_status(status: str) -> bool:
    return status in FINAL_STATUSES
