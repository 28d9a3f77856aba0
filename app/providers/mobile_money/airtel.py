# app/providers/mobile_money/airtel.py
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import requests

from app.payments.amounts import validate_amount
from app.payments.base import ProviderError
from app.payments.errors import describe_error, sanitize_error_message
from app.payments.phone import mask_phone, normalize_phone, validate_phone
from app.payments.polling import PollOutcome, poll_payment_status
from app.payments.retry import retry_call
from app.payments.status import map_payment_status
from app.payments.transaction_ids import generate_transaction_id
from app.providers.base import CollectionResult
from app.providers.mobile_money.config import AirtelConfig, airtel_config
from settings import settings

logger = logging.getLogger("buildmart.airtel")

TOKEN_SAFETY_BUFFER_S = 60
DEFAULT_TOKEN_TTL_S = 180


class AirtelMoneyProvider:
    """Airtel Money collections client (merchant payments, status, refunds)."""

    name = "airtel"

    def __init__(self, *, timeout_s: Optional[float] = None, sleep: Callable[[float], None] = time.sleep):
        self.timeout_s = float(timeout_s if timeout_s is not None else getattr(settings, "MM_HTTP_TIMEOUT_S", 20.0))
        self._sleep = sleep
        self._token: Optional[str] = None
        self._token_exp: float = 0.0

    def request_payment(
        self,
        *,
        amount: Any,
        phone: str,
        order_id: str,
        customer_name: str = "",
    ) -> CollectionResult:
        cfg = airtel_config()
        missing = cfg.missing()
        if missing:
            logger.error("airtel payment skipped: missing config %s", ",".join(missing))
            return CollectionResult(success=False, status="FAILED", error="AIRTEL_CONFIG_MISSING", retryable=False)

        check = validate_amount(amount)
        if not check.valid:
            return CollectionResult(success=False, status="FAILED", error=check.error, retryable=False)
        if not validate_phone(phone):
            return CollectionResult(success=False, status="FAILED", error="Invalid phone number", retryable=False)

        msisdn = normalize_phone(phone)
        transaction_id = generate_transaction_id(order_id, self.name)
        body = {
            "reference": transaction_id,
            "subscriber": {"country": cfg.country, "currency": cfg.currency, "msisdn": msisdn},
            "transaction": {
                "amount": amount,
                "country": cfg.country,
                "currency": cfg.currency,
                "id": transaction_id,
            },
        }

        logger.info(
            "airtel payment request transaction_id=%s order_id=%s amount=%s phone=%s",
            transaction_id,
            order_id,
            amount,
            mask_phone(msisdn),
        )

        try:
            payload = self._post(cfg, "/merchant/v1/payments/", body)
        except ProviderError as err:
            details = describe_error(err)
            logger.error("airtel payment request failed transaction_id=%s details=%s", transaction_id, details.to_dict())
            return CollectionResult(
                success=False,
                status="FAILED",
                transaction_id=transaction_id,
                error=sanitize_error_message(details.message),
                retryable=details.retryable,
            )

        status_block = payload.get("status") or {}
        txn = (payload.get("data") or {}).get("transaction") or {}
        success = bool(status_block.get("success"))

        logger.info("airtel payment request sent transaction_id=%s success=%s", transaction_id, success)
        return CollectionResult(
            success=success,
            status="PENDING" if success else "FAILED",
            transaction_id=txn.get("id") or transaction_id,
            provider_tx_id=txn.get("airtel_money_id"),
            message=status_block.get("message") or "Payment request sent to customer phone",
            error=None if success else sanitize_error_message(status_block.get("message")),
            response=payload,
        )

    def check_payment_status(self, reference: str) -> CollectionResult:
        cfg = airtel_config()
        if cfg.missing():
            return CollectionResult(success=False, status="UNKNOWN", transaction_id=reference, error="AIRTEL_CONFIG_MISSING", retryable=False)

        try:
            payload = retry_call(
                lambda: self._get(cfg, f"/standard/v1/payments/{reference}"),
                sleep=self._sleep,
                label="airtel status check",
            )
        except ProviderError as err:
            details = describe_error(err)
            logger.error("airtel status check failed transaction_id=%s details=%s", reference, details.to_dict())
            return CollectionResult(
                success=False,
                status="UNKNOWN",
                transaction_id=reference,
                error=sanitize_error_message(details.message),
                retryable=details.retryable,
            )

        txn = (payload.get("data") or {}).get("transaction") or {}
        raw_status = str(txn.get("status") or "")
        status = map_payment_status(raw_status, self.name)
        logger.info("airtel payment status transaction_id=%s status=%s", reference, raw_status)

        return CollectionResult(
            success=status == "COMPLETED",
            status=status,
            transaction_id=txn.get("id") or reference,
            provider_tx_id=txn.get("airtel_money_id"),
            reason=txn.get("message"),
            response=payload,
        )

    def poll_payment_status(self, reference: str, *, timeout_minutes: Optional[float] = None) -> PollOutcome:
        return poll_payment_status(
            self.check_payment_status,
            reference,
            timeout_minutes=timeout_minutes,
            sleep=self._sleep,
        )

    def refund_payment(self, transaction_id: str, amount: Any) -> CollectionResult:
        cfg = airtel_config()
        if cfg.missing():
            return CollectionResult(success=False, status="FAILED", transaction_id=transaction_id, error="AIRTEL_CONFIG_MISSING", retryable=False)

        refund_id = f"REFUND-{int(time.time() * 1000)}-{transaction_id}"
        body = {
            "transaction": {
                "amount": amount,
                "country": cfg.country,
                "currency": cfg.currency,
                "id": refund_id,
            },
            "reference": {"transaction": {"id": transaction_id}},
        }

        try:
            payload = self._post(cfg, "/standard/v1/payments/refund", body)
        except ProviderError as err:
            details = describe_error(err)
            logger.error("airtel refund failed transaction_id=%s details=%s", transaction_id, details.to_dict())
            return CollectionResult(
                success=False,
                status="FAILED",
                reference_id=refund_id,
                transaction_id=transaction_id,
                error=sanitize_error_message(details.message),
                retryable=details.retryable,
            )

        status_block = payload.get("status") or {}
        success = bool(status_block.get("success"))
        logger.info("airtel refund initiated refund_id=%s success=%s", refund_id, success)
        return CollectionResult(
            success=success,
            status="PENDING" if success else "FAILED",
            reference_id=refund_id,
            transaction_id=transaction_id,
            message=status_block.get("message"),
            response=payload,
        )

    # --- transport ---

    def _headers(self, cfg: AirtelConfig) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._get_token(cfg)}",
            "Content-Type": "application/json",
            "X-Country": cfg.country,
            "X-Currency": cfg.currency,
        }

    def _post(self, cfg: AirtelConfig, path: str, body: dict[str, Any]) -> dict[str, Any]:
        headers = self._headers(cfg)
        try:
            resp = requests.post(f"{cfg.base_url}{path}", headers=headers, json=body, timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise ProviderError.from_exception(exc) from exc
        return _payload_or_raise(resp)

    def _get(self, cfg: AirtelConfig, path: str) -> dict[str, Any]:
        headers = self._headers(cfg)
        try:
            resp = requests.get(f"{cfg.base_url}{path}", headers=headers, timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise ProviderError.from_exception(exc) from exc
        return _payload_or_raise(resp)

    def _get_token(self, cfg: AirtelConfig) -> str:
        now = time.time()
        if self._token and now < (self._token_exp - TOKEN_SAFETY_BUFFER_S):
            return self._token

        body = {
            "client_id": cfg.client_id,
            "client_secret": cfg.client_secret,
            "grant_type": "client_credentials",
        }
        try:
            resp = requests.post(
                f"{cfg.base_url}/auth/oauth2/token",
                headers={"Content-Type": "application/json"},
                json=body,
                timeout=self.timeout_s,
            )
        except requests.RequestException as exc:
            raise ProviderError.from_exception(exc) from exc

        payload = _safe_json(resp)
        token = payload.get("access_token") if resp.status_code == 200 and payload else None
        if not token:
            err = ProviderError.from_response(resp.status_code, payload, resp.text)
            logger.error("airtel token request failed details=%s", describe_error(err).to_dict())
            raise err

        expires_in = int(payload.get("expires_in") or DEFAULT_TOKEN_TTL_S)
        self._token = token
        self._token_exp = now + max(0, expires_in)
        logger.info("airtel access token obtained expires_in=%s", expires_in)
        return self._token


def _safe_json(resp: Any) -> Optional[dict[str, Any]]:
    try:
        payload = resp.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _payload_or_raise(resp: Any) -> dict[str, Any]:
    payload = _safe_json(resp)
    if not (200 <= resp.status_code < 300) or payload is None:
        raise ProviderError.from_response(resp.status_code, payload, resp.text)
    return payload
