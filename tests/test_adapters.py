from __future__ import annotations

import json
from datetime import datetime

import httpx
import pytest

from conftest import make_booking
from studio_booking.application.dto.payment_event import PaymentEventDTO
from studio_booking.domain.entities.booking import Artist
from studio_booking.domain.entities.payment_event import PaymentEventKind
from studio_booking.infrastructure.calendar.cal_com_client import CalComCalendar
from studio_booking.infrastructure.notifications.resend_notifier import ResendNotifier

START = datetime(2025, 6, 4, 14, 0)
ARTIST = Artist(id="artist-1", email="artist@example.com", cal_com_username="robin", cal_com_event_type_id="42")


def _client(handler, captured):
    def recording(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return handler(request)

    return httpx.Client(transport=httpx.MockTransport(recording))


def test_cal_com_booking_request():
    captured = []
    client = _client(lambda request: httpx.Response(200, json={"id": 123}), captured)
    calendar = CalComCalendar(api_key="cal_key", base_url="https://cal.test/v1/", client=client)

    booking_id = calendar.create_booking("robin", "42", START, "Alex", "alex@example.com")

    assert booking_id == "123"
    [request] = captured
    assert str(request.url) == "https://cal.test/v1/bookings"
    assert request.headers["Authorization"] == "Bearer cal_key"
    body = json.loads(request.content)
    assert body["eventTypeId"] == "42"
    assert body["start"] == START.isoformat()
    assert body["responses"] == {"name": "Alex", "email": "alex@example.com"}


def test_cal_com_errors_raise():
    client = _client(lambda request: httpx.Response(500, text="boom"), [])
    calendar = CalComCalendar(api_key="cal_key", base_url="https://cal.test/v1", client=client)

    with pytest.raises(httpx.HTTPStatusError):
        calendar.create_booking("robin", "42", START, "Alex", "alex@example.com")


def test_cal_com_requires_api_key(monkeypatch):
    from studio_booking.core.config import settings

    monkeypatch.setattr(settings, "CAL_COM_API_KEY", None)
    with pytest.raises(ValueError):
        CalComCalendar(client=httpx.Client())


def test_resend_notification():
    captured = []
    client = _client(lambda request: httpx.Response(200, json={"id": "msg_1"}), captured)
    notifier = ResendNotifier(api_key="re_key", from_email="Studio <hi@example.com>", api_url="https://mail.test/emails", client=client)

    message_id = notifier.booking_confirmed(ARTIST, make_booking("b1", START, client_name="Alex"))

    assert message_id == "msg_1"
    body = json.loads(captured[0].content)
    assert body["to"] == ["artist@example.com"]
    assert body["from"] == "Studio <hi@example.com>"
    assert "Alex" in body["text"]
    assert "04/06/2025 14:00" in body["text"]


def test_resend_escapes_client_name_in_html():
    captured = []
    client = _client(lambda request: httpx.Response(200, json={"id": "msg_2"}), captured)
    notifier = ResendNotifier(api_key="re_key", api_url="https://mail.test/emails", client=client)

    notifier.booking_confirmed(ARTIST, make_booking("b1", START, client_name="<script>x</script>"))

    body = json.loads(captured[0].content)
    assert "<script>" not in body["html"]
    assert "&lt;script&gt;x&lt;/script&gt;" in body["html"]
    assert "<script>x</script>" in body["text"]


def test_payment_event_parsing():
    event = PaymentEventDTO.model_validate(
        {
            "id": "evt_1",
            "type": "checkout.session.completed",
            "data": {"object": {"id": "cs_1", "amount_total": 5000, "currency": "eur", "metadata": {"bookingId": "b1"}}},
        }
    ).to_event()

    assert event.kind is PaymentEventKind.succeeded
    assert event.booking_reference == "b1"
    assert event.payment_reference == "cs_1"
    assert event.amount == 5000
    assert event.currency == "eur"


@pytest.mark.parametrize(
    "event_type, kind",
    [
        ("payment_intent.succeeded", PaymentEventKind.succeeded),
        ("payment_intent.payment_failed", PaymentEventKind.failed),
        ("charge.refunded", PaymentEventKind.other),
    ],
)
def test_payment_event_kinds(event_type, kind):
    assert PaymentEventDTO.model_validate({"id": "evt", "type": event_type}).to_event().kind is kind


def test_payment_event_without_metadata():
    event = PaymentEventDTO.model_validate({"type": "payment_intent.succeeded", "data": {"object": {}}}).to_event()

    assert event.booking_reference is None
    assert event.payment_reference is None
