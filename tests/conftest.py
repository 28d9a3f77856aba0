# tests/conftest.py

from typing import Any, Dict, List, Optional, Tuple, Union

import pytest

from app.providers.mobile_money.factory import clear_provider_cache
from app.providers.mobile_money.http import HttpResponse
from settings import settings


MTN_BASE = "https://momo.test"
AIRTEL_BASE = "https://airtel.test"


# ---------------------------
# Fake transport
# ---------------------------

def json_response(status_code: int, payload: Optional[dict] = None, text: str = "") -> HttpResponse:
    return HttpResponse(status_code=status_code, json=payload, text=text)


Reply = Union[HttpResponse, Exception]


class FakeHttp:
    """
    Stand-in for HttpClient.

    routes maps (METHOD, url suffix) to a list of replies; replies are consumed
    in order and the last one repeats.
    """

    def __init__(self, routes: Dict[Tuple[str, str], List[Reply]]):
        self.routes = routes
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, *, headers: dict, json_body: Optional[dict] = None, debug: bool = False) -> HttpResponse:
        return self._dispatch("POST", url, headers, json_body)

    def get(self, url: str, *, headers: dict, debug: bool = False) -> HttpResponse:
        return self._dispatch("GET", url, headers, None)

    def calls_to(self, suffix: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["url"].endswith(suffix)]

    def _dispatch(self, method: str, url: str, headers: dict, body: Optional[dict]) -> HttpResponse:
        self.calls.append({"method": method, "url": url, "headers": dict(headers), "json": body})
        for (m, suffix), replies in self.routes.items():
            if m == method and url.endswith(suffix):
                reply = replies.pop(0) if len(replies) > 1 else replies[0]
                if isinstance(reply, Exception):
                    raise reply
                return reply
        raise AssertionError(f"unexpected {method} {url}")


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


# ---------------------------
# Settings fixtures
# ---------------------------

@pytest.fixture(autouse=True)
def _fresh_provider_cache():
    clear_provider_cache()
    yield
    clear_provider_cache()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def mtn_env(monkeypatch):
    monkeypatch.setattr(settings, "SERVER_URL", "https://shop.test", raising=False)
    monkeypatch.setattr(settings, "MTN_MOMO_API_URL", MTN_BASE, raising=False)
    monkeypatch.setattr(settings, "MTN_SUBSCRIPTION_KEY", "sub-123", raising=False)
    monkeypatch.setattr(settings, "MTN_API_USER", "user-123", raising=False)
    monkeypatch.setattr(settings, "MTN_API_KEY", "key-123", raising=False)
    monkeypatch.setattr(settings, "MTN_ENVIRONMENT", "sandbox", raising=False)
    monkeypatch.setattr(settings, "PAYMENT_CURRENCY", "RWF", raising=False)


@pytest.fixture
def airtel_env(monkeypatch):
    monkeypatch.setattr(settings, "SERVER_URL", "https://shop.test", raising=False)
    monkeypatch.setattr(settings, "AIRTEL_API_URL", AIRTEL_BASE, raising=False)
    monkeypatch.setattr(settings, "AIRTEL_CLIENT_ID", "client-123", raising=False)
    monkeypatch.setattr(settings, "AIRTEL_CLIENT_SECRET", "secret-123", raising=False)
    monkeypatch.setattr(settings, "PAYMENT_COUNTRY", "RW", raising=False)
    monkeypatch.setattr(settings, "PAYMENT_CURRENCY", "RWF", raising=False)


@pytest.fixture
def no_provider_env(monkeypatch):
    for name in (
        "MTN_SUBSCRIPTION_KEY",
        "MTN_API_USER",
        "MTN_API_KEY",
        "AIRTEL_CLIENT_ID",
        "AIRTEL_CLIENT_SECRET",
    ):
        monkeypatch.setattr(settings, name, "", raising=False)
    monkeypatch.setattr(settings, "PAYMENT_STRICT_STARTUP_VALIDATION", False, raising=False)
