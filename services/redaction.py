from __future__ import annotations

import re
from typing import Any

from app.payments.phone import mask_phone


_EMAIL_RE = re.compile(r"\b([A-Za-z0-9._%+-])([A-Za-z0-9._%+-]*)(@[A-Za-z0-9.-]+\.[A-Za-z]{2,})\b")
# Rwandan MSISDNs in any of the accepted forms
_PHONE_RE = re.compile(r"(?<![\d+])(?:\+?250|0)?7[238]\d{7}(?!\d)")
# Authorization header credentials, e.g. "Bearer eyJ..." or "Basic dXNlcjprZXk="
_CREDENTIAL_RE = re.compile(r"\b(basic|bearer)\s+(?=[A-Za-z._~-]*[0-9+/=])[A-Za-z0-9._~+/=-]{8,}", re.I)

_SENSITIVE_KEY_MARKERS = (
    "token",
    "authorization",
    "secret",
    "password",
    "api_key",
    "subscription-key",
    "subscription_key",
    "encryption",
)


def _mask_email(match: re.Match) -> str:
    first = match.group(1)
    domain = match.group(3)
    return f"{first}***{domain}"


def redact_text(value: str) -> str:
    masked = _EMAIL_RE.sub(_mask_email, value)
    masked = _PHONE_RE.sub(lambda m: mask_phone(m.group(0)), masked)

    masked = _CREDENTIAL_RE.sub("[REDACTED]", masked)

    for marker in ("access_token", "client_secret"):
        if marker in masked.lower():
            return "[REDACTED]"

    return masked


def _is_sensitive_key(key: str) -> bool:
    key_l = (key or "").lower()
    return any(marker in key_l for marker in _SENSITIVE_KEY_MARKERS)


def redact_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return redact_dict(value)
    if isinstance(value, list):
        return [redact_value(v) for v in value]
    return value


def redact_dict(payload: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in payload.items():
        if _is_sensitive_key(str(k)):
            out[k] = "[REDACTED]"
        else:
            out[k] = redact_value(v)
    return out
