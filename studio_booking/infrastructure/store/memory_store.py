from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime

from studio_booking.application.ports.availability_store import AvailabilityStorePort
from studio_booking.application.ports.booking_store import BookingStorePort
from studio_booking.application.ports.template_store import TemplateStorePort
from studio_booking.domain.entities.availability import Schedule
from studio_booking.domain.entities.booking import (
    ACTIVE_STATUSES,
    Artist,
    Booking,
    BookingStatus,
    PaymentStatus,
)
from studio_booking.domain.entities.template import AvailabilityTemplate


class MemoryAvailabilityStore(AvailabilityStorePort):
    def __init__(self) -> None:
        self._schedules: dict[str, Schedule] = {}

    def load(self, artist_id: str) -> Schedule:
        return dict(self._schedules.get(artist_id, {}))

    def save(self, artist_id: str, schedule: Schedule) -> None:
        self._schedules[artist_id] = dict(schedule)


class MemoryTemplateStore(TemplateStorePort):
    def __init__(self) -> None:
        self._templates: dict[str, AvailabilityTemplate] = {}

    def list(self) -> list[AvailabilityTemplate]:
        return list(self._templates.values())

    def get(self, template_id: str) -> AvailabilityTemplate | None:
        return self._templates.get(template_id)

    def add(self, template: AvailabilityTemplate) -> None:
        self._templates[template.id] = template

    def delete(self, template_id: str) -> bool:
        return self._templates.pop(template_id, None) is not None


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        super().__init__()
        self._bookings: dict[str, Booking] = {}
        self._artists: dict[str, Artist] = {}
        self._lock = threading.Lock()

    def add(self, booking: Booking) -> None:
        with self._lock:
            self._bookings[booking.id] = booking
        self._notify_changed(booking.artist_id)

    def get(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    def list_active(self, artist_id: str) -> list[Booking]:
        active = [
            b for b in list(self._bookings.values())
            if b.artist_id == artist_id and b.status in ACTIVE_STATUSES
        ]
        return sorted(active, key=lambda b: b.start)

    def update_times(self, booking_id: str, artist_id: str, start: datetime, end: datetime) -> int:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None or booking.artist_id != artist_id:
                return 0
            self._bookings[booking_id] = replace(booking, start=start, end=end, updated_at=datetime.now())
        self._notify_changed(artist_id)
        return 1

    def set_payment_reference(self, booking_id: str, reference: str) -> int:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None or booking.status is not BookingStatus.pending:
                return 0
            self._bookings[booking_id] = replace(booking, payment_reference=reference, updated_at=datetime.now())
            return 1

    def confirm_if_pending(
        self,
        booking_id: str,
        calendar_integration_id: str | None,
        confirmed_at: datetime,
    ) -> int:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None or booking.status is not BookingStatus.pending:
                return 0
            self._bookings[booking_id] = replace(
                booking,
                status=BookingStatus.confirmed,
                payment_status=PaymentStatus.deposit_paid,
                calendar_integration_id=calendar_integration_id or booking.calendar_integration_id,
                confirmed_at=confirmed_at,
                updated_at=confirmed_at,
            )
        self._notify_changed(booking.artist_id)
        return 1

    def get_artist(self, artist_id: str) -> Artist | None:
        return self._artists.get(artist_id)

    def add_artist(self, artist: Artist) -> None:
        self._artists[artist.id] = artist
