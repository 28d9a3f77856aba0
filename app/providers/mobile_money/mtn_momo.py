# app/providers/mobile_money/mtn_momo.py
from __future__ import annotations

import base64
import logging
import time
import uuid
from typing import Any, Callable, Optional

from app.payments.amounts import validate_amount
from app.payments.base import ProviderError
from app.payments.errors import describe_error, sanitize_error_message
from app.payments.phone import mask_phone, normalize_phone, validate_phone
from app.payments.polling import PollOutcome, poll_payment_status
from app.payments.retry import retry_call
from app.payments.status import map_payment_status
from app.providers.base import CollectionResult
from app.providers.mobile_money.config import mtn_config
from app.providers.mobile_money.http import HttpClient
from settings import settings

logger = logging.getLogger("buildmart.mtn")

TOKEN_SAFETY_BUFFER_S = 60
DEFAULT_TOKEN_TTL_S = 3600


class MtnMomoProvider:
    """MTN MoMo collections (request-to-pay) client."""

    name = "mtn"

    def __init__(self, http: Optional[HttpClient] = None, *, sleep: Callable[[float], None] = time.sleep):
        timeout = float(getattr(settings, "MM_HTTP_TIMEOUT_S", 20.0))
        self.http = http or HttpClient(timeout_s=timeout)
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
        cfg = mtn_config()
        missing = cfg.missing()
        if missing:
            logger.error("mtn request-to-pay skipped: missing config %s", ",".join(missing))
            return CollectionResult(success=False, status="FAILED", error="MTN_CONFIG_MISSING", retryable=False)

        check = validate_amount(amount)
        if not check.valid:
            return CollectionResult(success=False, status="FAILED", error=check.error, retryable=False)
        if not validate_phone(phone):
            return CollectionResult(success=False, status="FAILED", error="Invalid phone number", retryable=False)

        msisdn = normalize_phone(phone)
        reference_id = str(uuid.uuid4())
        body = {
            "amount": str(amount),
            "currency": cfg.currency,
            "externalId": str(order_id),
            "payer": {"partyIdType": "MSISDN", "partyId": msisdn},
            "payerMessage": f"Payment for BuildMart Order {order_id}",
            "payeeNote": f"Order {order_id} - {customer_name}".rstrip(" -"),
        }

        logger.info(
            "mtn request-to-pay reference_id=%s order_id=%s amount=%s phone=%s",
            reference_id,
            order_id,
            amount,
            mask_phone(msisdn),
        )

        try:
            headers = self._auth_headers(cfg)
            headers["X-Reference-Id"] = reference_id
            headers["Content-Type"] = "application/json"
            if cfg.callback_url:
                headers["X-Callback-Url"] = cfg.callback_url

            resp = self.http.post(f"{cfg.base_url}/collection/v1_0/requesttopay", headers=headers, json_body=body, debug=True)
            # MoMo answers 202 Accepted with an empty body
            if resp.status_code not in (200, 201, 202):
                raise resp.to_error()
        except ProviderError as err:
            details = describe_error(err)
            logger.error("mtn request-to-pay failed reference_id=%s details=%s", reference_id, details.to_dict())
            return CollectionResult(
                success=False,
                status="FAILED",
                reference_id=reference_id,
                error=sanitize_error_message(details.message),
                retryable=details.retryable,
            )

        logger.info("mtn request-to-pay sent reference_id=%s", reference_id)
        return CollectionResult(
            success=True,
            status="PENDING",
            reference_id=reference_id,
            message="Payment request sent to customer phone",
        )

    def check_payment_status(self, reference: str) -> CollectionResult:
        cfg = mtn_config()
        if cfg.missing():
            return CollectionResult(success=False, status="UNKNOWN", reference_id=reference, error="MTN_CONFIG_MISSING", retryable=False)

        def _fetch() -> dict[str, Any]:
            resp = self.http.get(
                f"{cfg.base_url}/collection/v1_0/requesttopay/{reference}",
                headers=self._auth_headers(cfg),
                debug=True,
            )
            if resp.status_code != 200 or resp.json is None:
                raise resp.to_error()
            return resp.json

        try:
            payload = retry_call(_fetch, sleep=self._sleep, label="mtn status check")
        except ProviderError as err:
            details = describe_error(err)
            logger.error("mtn status check failed reference_id=%s details=%s", reference, details.to_dict())
            return CollectionResult(
                success=False,
                status="UNKNOWN",
                reference_id=reference,
                error=sanitize_error_message(details.message),
                retryable=details.retryable,
            )

        raw_status = str(payload.get("status") or "")
        status = map_payment_status(raw_status, self.name)
        logger.info("mtn payment status reference_id=%s status=%s", reference, raw_status)

        return CollectionResult(
            success=status == "COMPLETED",
            status=status,
            reference_id=reference,
            transaction_id=payload.get("financialTransactionId"),
            reason=_reason_text(payload.get("reason")),
            response=payload,
        )

    def poll_payment_status(self, reference: str, *, timeout_minutes: Optional[float] = None) -> PollOutcome:
        return poll_payment_status(
            self.check_payment_status,
            reference,
            timeout_minutes=timeout_minutes,
            sleep=self._sleep,
        )

    def get_account_balance(self) -> dict[str, Any]:
        """Collection account balance; raises ProviderError on failure."""
        cfg = mtn_config()
        resp = self.http.get(f"{cfg.base_url}/collection/v1_0/account/balance", headers=self._auth_headers(cfg))
        if resp.status_code != 200 or resp.json is None:
            err = resp.to_error()
            logger.error("mtn balance lookup failed details=%s", describe_error(err).to_dict())
            raise err
        return resp.json

    def _auth_headers(self, cfg) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._get_token(cfg)}",
            "X-Target-Environment": cfg.target_env,
            "Ocp-Apim-Subscription-Key": cfg.subscription_key,
        }

    def _get_token(self, cfg) -> str:
        now = time.time()
        if self._token and now < (self._token_exp - TOKEN_SAFETY_BUFFER_S):
            return self._token

        basic = base64.b64encode(f"{cfg.api_user}:{cfg.api_key}".encode()).decode()
        headers = {
            "Authorization": f"Basic {basic}",
            "Ocp-Apim-Subscription-Key": cfg.subscription_key,
        }
        resp = self.http.post(f"{cfg.base_url}/collection/token/", headers=headers, json_body=None)

        token = resp.json.get("access_token") if resp.status_code == 200 and resp.json else None
        if not token:
            err = resp.to_error()
            logger.error("mtn token request failed details=%s", describe_error(err).to_dict())
            raise err

        expires_in = int(resp.json.get("expires_in") or DEFAULT_TOKEN_TTL_S)
        self._token = token
        self._token_exp = now + max(0, expires_in)
        logger.info("mtn access token obtained expires_in=%s", expires_in)
        return self._token


def _reason_text(reason: Any) -> Optional[str]:
    if not reason:
        return None
    if isinstance(reason, dict):
        return str(reason.get("message") or reason.get("code") or "") or None
    return str(reason)
