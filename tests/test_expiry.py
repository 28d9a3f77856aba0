from __future__ import annotations

from datetime import datetime, timezone

import app.payments.expiry as expiry

NOW_MS = 1_700_000_000_000


def _freeze(monkeypatch):
    monkeypatch.setattr(expiry, "_now_ms", lambda: NOW_MS)


def test_is_expired_after_timeout(monkeypatch):
    _freeze(monkeypatch)
    assert expiry.is_expired(NOW_MS - 4 * 60000, 3) is True
    assert expiry.is_expired(NOW_MS - 1 * 60000, 3) is False


def test_exact_boundary_is_not_expired(monkeypatch):
    _freeze(monkeypatch)
    assert expiry.is_expired(NOW_MS - 3 * 60000, 3) is False
    assert expiry.is_expired(NOW_MS - 3 * 60000 - 1, 3) is True


def test_is_expired_accepts_datetimes(monkeypatch):
    _freeze(monkeypatch)
    created = datetime.fromtimestamp((NOW_MS - 5 * 60000) / 1000, tz=timezone.utc)
    assert expiry.is_expired(created) is True

    naive_recent = datetime.fromtimestamp((NOW_MS - 30000) / 1000, tz=timezone.utc).replace(tzinfo=None)
    assert expiry.is_expired(naive_recent) is False


def test_compute_timeout_default(monkeypatch):
    _freeze(monkeypatch)
    spec = expiry.compute_timeout()
    assert spec == expiry.TimeoutSpec(
        expires_at=NOW_MS + 180000,
        expires_in_seconds=180,
        max_polling_attempts=36,
    )


def test_polling_budget_is_floor_of_five_second_slots(monkeypatch):
    _freeze(monkeypatch)
    assert expiry.compute_timeout(1).max_polling_attempts == 12
    assert expiry.compute_timeout(0.1).max_polling_attempts == 1
    assert expiry.compute_timeout(0).max_polling_attempts == 0


def test_is_expired_accepts_iso_strings(monkeypatch):
    _freeze(monkeypatch)
    old = datetime.fromtimestamp((NOW_MS - 4 * 60000) / 1000, tz=timezone.utc)
    recent = datetime.fromtimestamp((NOW_MS - 60000) / 1000, tz=timezone.utc)

    assert expiry.is_expired(old.isoformat()) is True
    assert expiry.is_expired(recent.isoformat()) is False
    # serialized Mongo-style timestamps end in Z
    assert expiry.is_expired(old.strftime("%Y-%m-%dT%H:%M:%S.000Z")) is True
    assert expiry.is_expired(recent.replace(tzinfo=None).isoformat()) is False


def test_is_expired_unreadable_input_is_not_expired(monkeypatch):
    _freeze(monkeypatch)
    assert expiry.is_expired("not a date") is False
    assert expiry.is_expired("") is False
    assert expiry.is_expired(None) is False
    assert expiry.is_expired(float("nan")) is False
    assert expiry.is_expired(float("inf")) is False
