from __future__ import annotations

import hmac
import logging
import time

from studio_booking.application.exceptions import AuthenticationFailure


logger = logging.getLogger(__name__)


def parse_signature_header(header: str) -> tuple[int, list[str]]:
    """Split 't=<unix>,v1=<hex>,v1=<hex>' into the timestamp and the v1 signatures."""
    timestamp: int | None = None
    signatures: list[str] = []
    for part in header.split(","):
        key, sep, value = part.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                raise AuthenticationFailure("Malformed signature timestamp")
        elif key == "v1":
            signatures.append(value)
    if timestamp is None or not signatures:
        raise AuthenticationFailure("Malformed signature header")
    return timestamp, signatures


def compute_signature(body: bytes, timestamp: int, secret: str) -> str:
    signed_payload = f"{timestamp}.".encode("utf-8") + body
    return hmac.new(secret.encode("utf-8"), signed_payload, "sha256").hexdigest()


def verify_payment_signature(
    body: bytes,
    signature_header: str | None,
    secret: str | None,
    tolerance_seconds: int = 300,
    now: float | None = None,
) -> None:
    """Raise AuthenticationFailure unless the header signs this exact body with the shared secret."""
    if not signature_header:
        raise AuthenticationFailure("Missing signature header")

    if not secret:
        logger.error("Missing webhook secret for signature verification")
        raise AuthenticationFailure("Webhook secret not configured")

    timestamp, signatures = parse_signature_header(signature_header)

    expected = compute_signature(body, timestamp, secret)
    if not any(hmac.compare_digest(expected, sig) for sig in signatures):
        raise AuthenticationFailure("Signature mismatch")

    current = time.time() if now is None else now
    if tolerance_seconds > 0 and abs(current - timestamp) > tolerance_seconds:
        raise AuthenticationFailure("Signature timestamp outside tolerance")
