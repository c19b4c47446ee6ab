from __future__ import annotations

import pytest

from studio_booking.application.exceptions import AuthenticationFailure
from studio_booking.infrastructure.payments.webhook_verify import (
    compute_signature,
    parse_signature_header,
    verify_payment_signature,
)

SECRET = "whsec_test"
BODY = b'{"id":"evt_1","type":"payment_intent.succeeded"}'
NOW = 1_750_000_000


def _header(body: bytes = BODY, timestamp: int = NOW, secret: str = SECRET) -> str:
    return f"t={timestamp},v1={compute_signature(body, timestamp, secret)}"


def test_valid_signature_passes():
    verify_payment_signature(BODY, _header(), SECRET, now=NOW)


def test_any_v1_entry_may_match():
    header = f"t={NOW},v1=deadbeef,v1={compute_signature(BODY, NOW, SECRET)}"
    verify_payment_signature(BODY, header, SECRET, now=NOW)


def test_parse_header():
    assert parse_signature_header("t=12, v1=abc, v0=zzz, v1=def") == (12, ["abc", "def"])


@pytest.mark.parametrize(
    "header",
    [None, "", "v1=abc", "t=12", "t=soon,v1=abc", "garbage"],
)
def test_malformed_headers_are_rejected(header):
    with pytest.raises(AuthenticationFailure):
        verify_payment_signature(BODY, header, SECRET, now=NOW)


def test_tampered_body_is_rejected():
    with pytest.raises(AuthenticationFailure):
        verify_payment_signature(BODY + b" ", _header(), SECRET, now=NOW)


def test_wrong_secret_is_rejected():
    with pytest.raises(AuthenticationFailure):
        verify_payment_signature(BODY, _header(secret="other"), SECRET, now=NOW)


def test_missing_secret_is_rejected():
    with pytest.raises(AuthenticationFailure):
        verify_payment_signature(BODY, _header(), None, now=NOW)


def test_stale_timestamp_is_rejected():
    header = _header(timestamp=NOW - 301)
    with pytest.raises(AuthenticationFailure):
        verify_payment_signature(BODY, header, SECRET, now=NOW)

    verify_payment_signature(BODY, _header(timestamp=NOW - 300), SECRET, now=NOW)
