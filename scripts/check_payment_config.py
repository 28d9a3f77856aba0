# scripts/check_payment_config.py
from __future__ import annotations

import argparse
import logging
import sys

from app.providers.mobile_money.validate import missing_payment_config, validate_payment_config
from settings import settings


logger = logging.getLogger("check_payment_config")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check mobile money provider configuration.")
    parser.add_argument("--strict", action="store_true", help="fail instead of warning on missing values")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)

    logger.info(
        "mtn_env=%s airtel_env=%s currency=%s",
        settings.MTN_ENVIRONMENT,
        settings.AIRTEL_ENVIRONMENT,
        settings.PAYMENT_CURRENCY,
    )

    try:
        ok = validate_payment_config(strict=args.strict)
    except RuntimeError as exc:
        print(str(exc))
        return 2

    if ok:
        print("All payment provider settings are present.")
        return 0

    print("Missing payment settings: %s" % ", ".join(missing_payment_config()))
    return 2


if __name__ == "__main__":
    sys.exit(main())
