# app/payments/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx
import requests


@dataclass(frozen=True)
class ErrorResponse:
    status: int
    data: Optional[dict[str, Any]] = None


class ProviderError(Exception):
    """
    Failure talking to a payment provider.

    response is None when no HTTP response came back at all (DNS, refused
    connection, timeout); otherwise it carries the status and decoded body.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        response: Optional[ErrorResponse] = None,
    ):
        super().__init__(message or "")
        self.message = message
        self.code = code
        self.response = response

    def __repr__(self) -> str:
        status = self.response.status if self.response else None
        return f"ProviderError(message={self.message!r}, code={self.code!r}, status={status!r})"

    @classmethod
    def from_response(
        cls,
        status_code: int,
        payload: Any = None,
        text: str = "",
    ) -> "ProviderError":
        data = payload if isinstance(payload, dict) else None
        return cls(
            message=(text or "").strip()[:300] or f"HTTP {status_code}",
            response=ErrorResponse(status=int(status_code), data=data),
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ProviderError":
        if isinstance(exc, ProviderError):
            return exc

        # httpx
        if isinstance(exc, httpx.HTTPStatusError):
            return cls(
                message=str(exc),
                response=ErrorResponse(status=exc.response.status_code, data=_json_or_none(exc.response)),
            )
        if isinstance(exc, httpx.TimeoutException):
            return cls(message=str(exc) or "timeout", code="TIMEOUT")
        if isinstance(exc, httpx.HTTPError):
            return cls(message=str(exc), code="NETWORK_ERROR")

        # requests
        if isinstance(exc, requests.RequestException):
            resp = exc.response
            if resp is not None:
                return cls(
                    message=str(exc),
                    response=ErrorResponse(status=resp.status_code, data=_json_or_none(resp)),
                )
            if isinstance(exc, requests.Timeout):
                return cls(message=str(exc) or "timeout", code="TIMEOUT")
            return cls(message=str(exc), code="NETWORK_ERROR")

        return cls(message=str(exc) or exc.__class__.__name__)


def _json_or_none(resp: Any) -> Optional[dict[str, Any]]:
    try:
        payload = resp.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None
