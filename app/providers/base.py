# app/providers/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class CollectionResult:
    success: bool
    # PENDING | COMPLETED | FAILED, or the provider's own code when it is not mapped
    status: str
    reference_id: Optional[str] = None
    transaction_id: Optional[str] = None
    provider_tx_id: Optional[str] = None
    message: Optional[str] = None
    # user-safe text (see app.payments.errors.sanitize_error_message)
    error: Optional[str] = None
    reason: Optional[str] = None
    retryable: Optional[bool] = None
    response: Optional[dict[str, Any]] = None


class CollectionProvider(Protocol):
    name: str

    def request_payment(
        self,
        *,
        amount: Any,
        phone: str,
        order_id: str,
        customer_name: str = "",
    ) -> CollectionResult: ...

    def check_payment_status(self, reference: str) -> CollectionResult: ...
