from __future__ import annotations

from app.providers.mobile_money.airtel import AirtelMoneyProvider
from app.providers.mobile_money.config import SUPPORTED_PROVIDERS
from app.providers.mobile_money.factory import get_provider
from app.providers.mobile_money.mtn_momo import MtnMomoProvider


def test_get_provider_by_name():
    assert isinstance(get_provider("mtn"), MtnMomoProvider)
    assert isinstance(get_provider("Airtel"), AirtelMoneyProvider)


def test_aliases_share_cached_instance():
    assert get_provider("MTN_MOMO") is get_provider("momo")
    assert get_provider("airtel-money") is get_provider("airtel")


def test_unknown_provider():
    assert get_provider("flutterwave") is None
    assert get_provider("") is None
    assert get_provider(None) is None


def test_every_supported_provider_resolves():
    for name in SUPPORTED_PROVIDERS:
        assert get_provider(name) is not None
