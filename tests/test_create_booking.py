from __future__ import annotations

from datetime import datetime

import pytest

from conftest import MONDAY_MORNING, make_booking
from studio_booking.application.exceptions import BookingNotFoundError, SlotUnavailableError
from studio_booking.application.use_cases.availability import AvailabilityStore
from studio_booking.application.use_cases.calendar_events import CalendarEventSource
from studio_booking.application.use_cases.create_booking import CreateBookingUseCase
from studio_booking.domain.entities.booking import BookingStatus, PaymentStatus
from studio_booking.infrastructure.store.memory_store import MemoryAvailabilityStore, MemoryBookingStore


@pytest.fixture
def bookings():
    return MemoryBookingStore()


@pytest.fixture
def use_case(bookings):
    persistence = MemoryAvailabilityStore()
    persistence.save("artist-1", {"0-10": True, "0-11": True})
    availability = AvailabilityStore("artist-1", persistence)
    return CreateBookingUseCase(bookings, availability, CalendarEventSource(bookings), clock=lambda: MONDAY_MORNING)


def test_pending_booking_is_created(use_case, bookings):
    booking = use_case.create_pending(datetime(2025, 6, 2, 10, 30), 60, "Sam", "sam@example.com", "pi_1")

    stored = bookings.get(booking.id)
    assert stored.status is BookingStatus.pending
    assert stored.payment_status is PaymentStatus.pending
    assert stored.end == datetime(2025, 6, 2, 11, 30)
    assert stored.payment_reference == "pi_1"
    assert stored.artist_id == "artist-1"


def test_slot_must_be_fully_available(use_case):
    with pytest.raises(SlotUnavailableError):
        use_case.create_pending(datetime(2025, 6, 2, 11, 30), 60, "Sam", "sam@example.com")


def test_past_slots_are_refused(use_case):
    with pytest.raises(SlotUnavailableError):
        use_case.create_pending(datetime(2025, 6, 2, 6, 0), 30, "Sam", "sam@example.com")


def test_overlapping_slots_are_refused(use_case, bookings):
    bookings.add(make_booking("b1", datetime(2025, 6, 2, 11, 0)))

    with pytest.raises(SlotUnavailableError):
        use_case.create_pending(datetime(2025, 6, 2, 10, 30), 60, "Sam", "sam@example.com")

    # touching intervals are fine
    booking = use_case.create_pending(datetime(2025, 6, 2, 10, 0), 60, "Sam", "sam@example.com")
    assert booking.end == datetime(2025, 6, 2, 11, 0)


def test_invalid_duration(use_case):
    with pytest.raises(ValueError):
        use_case.create_pending(datetime(2025, 6, 2, 10, 0), 0, "Sam", "sam@example.com")


def test_attach_payment_reference(use_case, bookings):
    bookings.add(make_booking("b1", datetime(2025, 6, 2, 10, 0)))
    bookings.add(make_booking("b2", datetime(2025, 6, 2, 11, 0), status=BookingStatus.confirmed))

    use_case.attach_payment_reference("b1", "pi_7")
    assert bookings.get("b1").payment_reference == "pi_7"

    with pytest.raises(SlotUnavailableError):
        use_case.attach_payment_reference("b2", "pi_8")
    with pytest.raises(BookingNotFoundError):
        use_case.attach_payment_reference("missing", "pi_9")
