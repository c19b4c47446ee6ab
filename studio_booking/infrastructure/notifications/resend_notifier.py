from __future__ import annotations

import html
import logging

import httpx

from studio_booking.application.ports.notifier import NotifierPort
from studio_booking.core.config import settings
from studio_booking.domain.entities.booking import Artist, Booking


class ResendNotifier(NotifierPort):
    def __init__(
        self,
        api_key: str | None = None,
        from_email: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key or settings.RESEND_API_KEY
        self._from_email = from_email or settings.RESEND_FROM_EMAIL
        self._api_url = api_url or settings.RESEND_API_URL
        self._client = client or httpx.Client(timeout=timeout or settings.NOTIFY_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("RESEND_API_KEY is required for email notifications")

    def booking_confirmed(self, artist: Artist, booking: Booking) -> str | None:
        client = booking.client_name or booking.client_email
        when = booking.start.strftime("%d/%m/%Y %H:%M")
        text = (
            f"Booking confirmed\n"
            f"Client: {client}\n"
            f"Date: {when}\n"
            f"View it: {settings.DASHBOARD_URL}"
        )
        html_body = (
            "<h1>Booking confirmed</h1>"
            f"<p><strong>Client:</strong> {html.escape(client)}</p>"
            f"<p><strong>Date:</strong> {when}</p>"
            f'<a href="{settings.DASHBOARD_URL}">View the booking</a>'
        )
        payload = {
            "from": self._from_email,
            "to": [artist.email],
            "subject": "New booking confirmed",
            "html": html_body,
            "text": text,
        }
        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}

        resp = self._client.post(self._api_url, json=payload, headers=headers)
        if resp.status_code >= 400:
            self._logger.error(
                "Resend send failed",
                extra={"status": resp.status_code, "booking_id": booking.id, "error": resp.text[:500]},
            )
        resp.raise_for_status()

        try:
            message_id = resp.json().get("id")
        except ValueError:
            message_id = None
        self._logger.info("Booking notification sent", extra={"booking_id": booking.id})
        return message_id
