from __future__ import annotations

import logging
from datetime import datetime

from studio_booking.application.exceptions import ResourceMismatchError
from studio_booking.application.ports.booking_store import BookingChangeListener, BookingStorePort
from studio_booking.domain.entities.appointment import Appointment, SlotAvailability


class CalendarEventSource:
    """
    Read model over bookings: only pending and confirmed bookings are visible
    as appointments. Intervals are half-open, touching endpoints never overlap.
    """

    def __init__(self, store: BookingStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def subscribe(self, listener: BookingChangeListener) -> None:
        """Called with the artist id after any write that changes its appointments."""
        self._store.subscribe(listener)

    def list_events(
        self,
        artist_id: str,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
    ) -> list[Appointment]:
        appointments = [Appointment.from_booking(b) for b in self._store.list_active(artist_id) if b.is_active]
        if range_start is not None:
            appointments = [a for a in appointments if a.end > range_start]
        if range_end is not None:
            appointments = [a for a in appointments if a.start < range_end]
        return sorted(appointments, key=lambda a: a.start)

    def check_overlap(self, artist_id: str, exclude_id: str | None, start: datetime, end: datetime) -> bool:
        for appointment in self.list_events(artist_id):
            if appointment.id == exclude_id:
                continue
            if appointment.overlaps(start, end):
                return True
        return False

    def check_slot_availability(
        self, artist_id: str, exclude_id: str | None, start: datetime, end: datetime
    ) -> SlotAvailability:
        if end <= start:
            return SlotAvailability(available=False, reason="End must be after start")
        if self.check_overlap(artist_id, exclude_id, start, end):
            return SlotAvailability(available=False, reason="Another appointment occupies this slot")
        return SlotAvailability(available=True)

    def reschedule(self, artist_id: str, booking_id: str, new_start: datetime, new_end: datetime) -> None:
        if new_end <= new_start:
            raise ValueError("End must be after start")
        affected = self._store.update_times(booking_id, artist_id, new_start, new_end)
        if affected == 0:
            raise ResourceMismatchError(f"Booking {booking_id} does not belong to artist {artist_id}")
        self._logger.info(
            "Appointment rescheduled",
            extra={"booking_id": booking_id, "artist_id": artist_id},
        )

    def move_appointment(
        self, artist_id: str, booking_id: str, new_start: datetime, new_end: datetime
    ) -> SlotAvailability:
        """
        Drag-and-drop move: overlap check, then reschedule. The two steps are
        not atomic; a concurrent move into the same interval can slip between them.
        """
        result = self.check_slot_availability(artist_id, booking_id, new_start, new_end)
        if not result.available:
            return result
        self.reschedule(artist_id, booking_id, new_start, new_end)
        return result
