from __future__ import annotations

import logging
from datetime import datetime

from studio_booking.application.ports.calendar_integration import CalendarIntegrationPort


class MockCalendar(CalendarIntegrationPort):
    def __init__(self) -> None:
        self._bookings: dict[str, tuple[str, str, datetime, str]] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def bookings(self) -> dict[str, tuple[str, str, datetime, str]]:
        return dict(self._bookings)

    def create_booking(
        self,
        resource_identity: str,
        event_type_identity: str,
        start_time: datetime,
        client_name: str,
        client_email: str,
    ) -> str:
        booking_id = f"mock_booking_{len(self._bookings) + 1}"
        self._bookings[booking_id] = (resource_identity, event_type_identity, start_time, client_email)
        self._logger.info(
            "Mock calendar booking created",
            extra={"integration_id": booking_id, "start": start_time.isoformat()},
        )
        return booking_id
