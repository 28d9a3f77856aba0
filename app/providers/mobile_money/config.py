# app/providers/mobile_money/config.py
from __future__ import annotations

from dataclasses import dataclass

from settings import settings


SUPPORTED_PROVIDERS = ("mtn", "airtel")


def normalize_provider(value: str) -> str:
    v = (value or "").strip().lower().replace("-", "_").replace(" ", "_")
    if v in ("momo", "mtn_momo"):
        return "mtn"
    if v == "airtel_money":
        return "airtel"
    return v


def callback_url(provider: str) -> str:
    server = (settings.SERVER_URL or "").strip().rstrip("/")
    if not server:
        return ""
    return f"{server}/api/payments/{provider}/callback"


def currency() -> str:
    return (settings.PAYMENT_CURRENCY or "RWF").strip().upper()


@dataclass(frozen=True)
class MtnConfig:
    base_url: str
    subscription_key: str
    api_user: str
    api_key: str
    target_env: str
    currency: str
    callback_url: str

    def missing(self) -> list[str]:
        out = []
        if not self.subscription_key:
            out.append("MTN_SUBSCRIPTION_KEY")
        if not self.api_user:
            out.append("MTN_API_USER")
        if not self.api_key:
            out.append("MTN_API_KEY")
        return out


def mtn_config() -> MtnConfig:
    return MtnConfig(
        base_url=(settings.MTN_MOMO_API_URL or "").strip().rstrip("/"),
        subscription_key=(settings.MTN_SUBSCRIPTION_KEY or "").strip(),
        api_user=(settings.MTN_API_USER or "").strip(),
        api_key=(settings.MTN_API_KEY or "").strip(),
        target_env=(settings.MTN_ENVIRONMENT or "sandbox").strip(),
        currency=currency(),
        callback_url=callback_url("mtn"),
    )


@dataclass(frozen=True)
class AirtelConfig:
    base_url: str
    client_id: str
    client_secret: str
    environment: str
    country: str
    currency: str
    callback_url: str

    def missing(self) -> list[str]:
        out = []
        if not self.client_id:
            out.append("AIRTEL_CLIENT_ID")
        if not self.client_secret:
            out.append("AIRTEL_CLIENT_SECRET")
        return out


def airtel_config() -> AirtelConfig:
    return AirtelConfig(
        base_url=(settings.AIRTEL_API_URL or "").strip().rstrip("/"),
        client_id=(settings.AIRTEL_CLIENT_ID or "").strip(),
        client_secret=(settings.AIRTEL_CLIENT_SECRET or "").strip(),
        environment=(settings.AIRTEL_ENVIRONMENT or "sandbox").strip().lower(),
        country=(settings.PAYMENT_COUNTRY or "RW").strip().upper(),
        currency=currency(),
        callback_url=callback_url("airtel"),
    )


@dataclass(frozen=True)
class FlutterwaveConfig:
    public_key: str
    secret_key: str
    encryption_key: str
    environment: str
    callback_url: str


def flutterwave_config() -> FlutterwaveConfig:
    return FlutterwaveConfig(
        public_key=(settings.FLUTTERWAVE_PUBLIC_KEY or "").strip(),
        secret_key=(settings.FLUTTERWAVE_SECRET_KEY or "").strip(),
        encryption_key=(settings.FLUTTERWAVE_ENCRYPTION_KEY or "").strip(),
        environment=(settings.FLUTTERWAVE_ENVIRONMENT or "test").strip().lower(),
        callback_url=callback_url("flutterwave"),
    )
