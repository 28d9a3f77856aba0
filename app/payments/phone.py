# app/payments/phone.py
from __future__ import annotations

import re
from typing import Optional


# 078 / 073 / 072 followed by 7 digits, with an optional +250 / 250 / 0 prefix
RWANDA_PHONE_RE = re.compile(r"^(\+?250|0)?7[238]\d{7}$")
COUNTRY_CODE = "250"
MASK_PLACEHOLDER = "***"

_SEPARATORS_RE = re.compile(r"[\s\-()]")


def _clean(phone: str) -> str:
    return _SEPARATORS_RE.sub("", phone)


def validate_phone(phone: Optional[str]) -> bool:
    if not phone:
        return False
    return bool(RWANDA_PHONE_RE.match(_clean(phone)))


def normalize_phone(phone: Optional[str]) -> str:
    """
    Rewrite a Rwandan number to the 250XXXXXXXXX form the providers expect.

    The result is not re-validated: garbage in gives deterministic garbage out,
    so call validate_phone() first when the input is untrusted.
    """
    if not phone:
        return ""

    cleaned = _clean(phone)
    if cleaned.startswith("+250"):
        cleaned = cleaned[4:]
    elif cleaned.startswith("250"):
        cleaned = cleaned[3:]
    elif cleaned.startswith("0"):
        cleaned = cleaned[1:]

    return f"{COUNTRY_CODE}{cleaned}"


def mask_phone(phone: Optional[str]) -> str:
    # positional only; safe for log lines
    if not phone or len(phone) < 8:
        return MASK_PLACEHOLDER
    return f"{phone[:6]}XXX{phone[-2:]}"
