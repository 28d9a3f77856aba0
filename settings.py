# settings.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Literal



class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # -----------------------
    # Server
    # -----------------------
    SERVER_URL: str = ""
    LOG_LEVEL: str = "INFO"

    # -----------------------
    # Payments (shared)
    # -----------------------
    PAYMENT_CURRENCY: str = "RWF"
    PAYMENT_COUNTRY: str = "RW"
    PAYMENT_TXN_PREFIX: str = Field(default="BLDMRT", min_length=1)
    PAYMENT_STRICT_STARTUP_VALIDATION: bool = False

    PAYMENT_MIN_AMOUNT: float = 100
    PAYMENT_MAX_AMOUNT: float = 10_000_000

    # whole-request timeout and the status polling cadence
    PAYMENT_TIMEOUT_MINUTES: float = 3
    PAYMENT_STATUS_CHECK_INTERVAL_S: float = 5.0
    PAYMENT_RETRY_ATTEMPTS: int = Field(default=3, ge=1)

    RETRY_BASE_DELAY_MS: int = 1000
    RETRY_MAX_DELAY_MS: int = 30000

    # HTTP timeouts
    MM_HTTP_TIMEOUT_S: float = 20.0

    # -----------------------
    # MTN MOMO (collections)
    # -----------------------
    MTN_MOMO_API_URL: str = "https://sandbox.momodeveloper.mtn.com"
    MTN_SUBSCRIPTION_KEY: str = ""
    MTN_API_USER: str = ""
    MTN_API_KEY: str = ""
    # X-Target-Environment header value: "sandbox" or a production target like "mtnrwanda"
    MTN_ENVIRONMENT: str = "sandbox"

    # -----------------------
    # AIRTEL MONEY
    # -----------------------
    AIRTEL_API_URL: str = "https://openapi.airtel.africa"
    AIRTEL_CLIENT_ID: str = ""
    AIRTEL_CLIENT_SECRET: str = ""
    AIRTEL_ENVIRONMENT: Literal["sandbox", "production"] = "sandbox"

    # -----------------------
    # FLUTTERWAVE (cards)
    # -----------------------
    FLUTTERWAVE_PUBLIC_KEY: str = ""
    FLUTTERWAVE_SECRET_KEY: str = ""
    FLUTTERWAVE_ENCRYPTION_KEY: str = ""
    FLUTTERWAVE_ENVIRONMENT: str = "test"



settings = Settings()
