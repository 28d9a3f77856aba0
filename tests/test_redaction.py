import logging

from services.redaction import redact_dict, redact_text


def test_redact_text_masks_phone_and_email():
    text = "User alice@example.com phone 0788123456 and +250738123456"
    redacted = redact_text(text)
    assert "alice@example.com" not in redacted
    assert "0788123456" not in redacted
    assert "+250738123456" not in redacted
    assert "a***@example.com" in redacted
    assert "078812XXX56" in redacted
    assert "+25073XXX56" in redacted


def test_redact_text_drops_bearer_tokens():
    assert redact_text("Authorization: Bearer abcdef12345") == "Authorization: [REDACTED]"
    assert redact_text("Authorization: Basic dXNlcjprZXk=") == "Authorization: [REDACTED]"
    assert redact_text('{"access_token": "abc"}') == "[REDACTED]"


def test_redact_text_keeps_plain_words_after_basic_or_bearer():
    assert redact_text("basic validation failed for order 42") == "basic validation failed for order 42"
    assert redact_text("bearer of bad news") == "bearer of bad news"


def test_redact_text_leaves_other_numbers():
    assert redact_text("order 123456789012345 amount 5000") == "order 123456789012345 amount 5000"


def test_redact_dict_masks_sensitive_keys():
    payload = {
        "Authorization": "Basic dXNlcjprZXk=",
        "Ocp-Apim-Subscription-Key": "sub-123",
        "client_secret": "secret-123",
        "payer": {"partyIdType": "MSISDN", "partyId": "250788123456"},
        "amount": 5000,
    }
    redacted = redact_dict(payload)
    assert redacted["Authorization"] == "[REDACTED]"
    assert redacted["Ocp-Apim-Subscription-Key"] == "[REDACTED]"
    assert redacted["client_secret"] == "[REDACTED]"
    assert redacted["payer"]["partyId"] == "250788XXX56"
    assert redacted["amount"] == 5000


def test_log_line_uses_redaction_helper(caplog):
    logger = logging.getLogger("redaction-test")
    caplog.set_level(logging.INFO)
    logger.info("payload=%s", redact_text("phone 0788123456 email alice@example.com"))
    assert "0788123456" not in caplog.text
    assert "alice@example.com" not in caplog.text
