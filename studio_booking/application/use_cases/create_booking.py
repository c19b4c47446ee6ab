from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable

from studio_booking.application.exceptions import BookingNotFoundError, SlotUnavailableError
from studio_booking.application.ports.booking_store import BookingStorePort
from studio_booking.application.use_cases.availability import AvailabilityStore
from studio_booking.application.use_cases.calendar_events import CalendarEventSource
from studio_booking.application.use_cases.suggest_slots import covers_available_cells
from studio_booking.domain.entities.booking import Booking, BookingStatus, PaymentStatus


class CreateBookingUseCase:
    """Turns a selected slot into a pending booking awaiting payment."""

    def __init__(
        self,
        store: BookingStorePort,
        availability: AvailabilityStore,
        events: CalendarEventSource,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._availability = availability
        self._events = events
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def create_pending(
        self,
        start: datetime,
        duration_minutes: int,
        client_name: str | None,
        client_email: str,
        payment_reference: str | None = None,
    ) -> Booking:
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
        artist_id = self._availability.artist_id
        end = start + timedelta(minutes=duration_minutes)
        now = self._clock()

        if start < now:
            raise SlotUnavailableError("Slot is in the past")
        if not self._cells_available(start, end):
            raise SlotUnavailableError("Slot is outside the artist's availability")
        if self._events.check_overlap(artist_id, None, start, end):
            raise SlotUnavailableError("Another appointment occupies this slot")

        booking = Booking(
            id=str(uuid.uuid4()),
            artist_id=artist_id,
            start=start,
            end=end,
            client_name=client_name,
            client_email=client_email,
            status=BookingStatus.pending,
            payment_status=PaymentStatus.pending,
            payment_reference=payment_reference,
            created_at=now,
            updated_at=now,
        )
        self._store.add(booking)
        self._logger.info("Pending booking created", extra={"booking_id": booking.id, "artist_id": artist_id})
        return booking

    def attach_payment_reference(self, booking_id: str, reference: str) -> None:
        if self._store.get(booking_id) is None:
            raise BookingNotFoundError(booking_id)
        if self._store.set_payment_reference(booking_id, reference) == 0:
            raise SlotUnavailableError(f"Booking {booking_id} is no longer pending")

    def _cells_available(self, start: datetime, end: datetime) -> bool:
        return covers_available_cells(
            start,
            end,
            self._availability.copy(),
            self._availability.hour_start,
            self._availability.hour_end,
        )
