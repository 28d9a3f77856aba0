from __future__ import annotations

import pytest

from app.payments.status import PaymentStatus, is_final_status, map_payment_status


@pytest.mark.parametrize(
    "status,provider,expected",
    [
        ("SUCCESSFUL", "mtn", "COMPLETED"),
        ("PENDING", "mtn", "PENDING"),
        ("FAILED", "mtn", "FAILED"),
        ("TS", "airtel", "COMPLETED"),
        ("TF", "airtel", "FAILED"),
        ("TP", "airtel", "PENDING"),
        ("TIP", "airtel", "PENDING"),
    ],
)
def test_known_codes(status, provider, expected):
    assert map_payment_status(status, provider) == expected


def test_unknown_codes_pass_through():
    assert map_payment_status("UNKNOWN", "mtn") == "UNKNOWN"
    assert map_payment_status("TS", "mtn") == "TS"
    assert map_payment_status("SUCCESSFUL", "flutterwave") == "SUCCESSFUL"


def test_provider_is_case_insensitive():
    assert map_payment_status("SUCCESSFUL", "MTN") == "COMPLETED"
    assert map_payment_status("TS", " Airtel ") == "COMPLETED"


def test_status_codes_are_exact():
    assert map_payment_status("successful", "mtn") == "successful"


def test_final_statuses():
    assert is_final_status(PaymentStatus.COMPLETED.value)
    assert is_final_status("FAILED")
    assert not is_final_status("PENDING")
    assert not is_final_status("UNKNOWN")
