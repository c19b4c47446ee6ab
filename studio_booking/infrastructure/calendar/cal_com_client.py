from __future__ import annotations

import logging
from datetime import datetime

import httpx

from studio_booking.application.ports.calendar_integration import CalendarIntegrationPort
from studio_booking.core.config import settings


class CalComCalendar(CalendarIntegrationPort):
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key or settings.CAL_COM_API_KEY
        self._base_url = (base_url or settings.CAL_COM_BASE_URL).rstrip("/")
        self._client = client or httpx.Client(timeout=timeout or settings.CAL_COM_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("CAL_COM_API_KEY is required for Cal.com calendar")

    def create_booking(
        self,
        resource_identity: str,
        event_type_identity: str,
        start_time: datetime,
        client_name: str,
        client_email: str,
    ) -> str:
        url = f"{self._base_url}/bookings"
        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        payload = {
            "eventTypeId": event_type_identity,
            "username": resource_identity,
            "start": start_time.isoformat(),
            "responses": {
                "name": client_name,
                "email": client_email,
            },
        }

        response = self._client.post(url, json=payload, headers=headers)
        if response.status_code >= 400:
            self._logger.error(
                "Cal.com booking failed",
                extra={"status": response.status_code, "error": response.text[:500]},
            )
        response.raise_for_status()

        data = response.json()
        booking_id = data.get("id") or data.get("uid") or (data.get("data") or {}).get("id")
        if not booking_id:
            raise ValueError("No booking ID returned from Cal.com API")

        self._logger.info("Cal.com booking created", extra={"integration_id": booking_id})
        return str(booking_id)
