# app/providers/mobile_money/validate.py
from __future__ import annotations

import logging
from typing import Optional

from app.providers.mobile_money.config import airtel_config, mtn_config
from settings import settings

logger = logging.getLogger("buildmart")


def missing_payment_config() -> list[str]:
    missing = mtn_config().missing() + airtel_config().missing()
    return [f"{name} is missing" for name in missing]


def validate_payment_config(*, strict: Optional[bool] = None) -> bool:
    """
    Check that provider credentials are present.

    Non-strict: log a warning and keep going (some payment methods just won't work).
    Strict: raise RuntimeError listing everything that is missing.
    """
    if strict is None:
        strict = bool(settings.PAYMENT_STRICT_STARTUP_VALIDATION)

    errors = missing_payment_config()
    if not errors:
        logger.info("payment config check passed")
        return True

    if strict:
        raise RuntimeError(
            "Payment configuration validation failed: " + ", ".join(errors)
        )

    logger.warning("payment configuration warnings: %s", "; ".join(errors))
    logger.warning("some payment methods may not work correctly")
    return False
