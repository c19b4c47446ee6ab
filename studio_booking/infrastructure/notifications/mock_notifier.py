from __future__ import annotations

import logging

from studio_booking.application.ports.notifier import NotifierPort
from studio_booking.domain.entities.booking import Artist, Booking


class MockNotifier(NotifierPort):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self._logger = logging.getLogger(__name__)

    def booking_confirmed(self, artist: Artist, booking: Booking) -> str | None:
        self.sent.append((artist.email, booking.id))
        self._logger.info(
            "Mock booking notification", extra={"booking_id": booking.id, "artist_id": artist.id}
        )
        return None
