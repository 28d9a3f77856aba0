# app/providers/mobile_money/factory.py
from __future__ import annotations

from typing import Dict, Optional

from app.providers.base import CollectionProvider
from app.providers.mobile_money.config import SUPPORTED_PROVIDERS, normalize_provider

_PROVIDER_CACHE: Dict[str, CollectionProvider] = {}


def get_provider(name: str) -> Optional[CollectionProvider]:
    key = normalize_provider(name)
    if key not in SUPPORTED_PROVIDERS:
        return None

    if key in _PROVIDER_CACHE:
        return _PROVIDER_CACHE[key]

    if key == "mtn":
        from app.providers.mobile_money.mtn_momo import MtnMomoProvider
        provider = MtnMomoProvider()

    else:
        from app.providers.mobile_money.airtel import AirtelMoneyProvider
        provider = AirtelMoneyProvider()

    _PROVIDER_CACHE[key] = provider
    return provider


def clear_provider_cache() -> None:
    _PROVIDER_CACHE.clear()
