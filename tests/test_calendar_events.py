"""
Tests for the appointment read model, overlap checks and rescheduling.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from conftest import make_booking
from studio_booking.application.exceptions import ResourceMismatchError
from studio_booking.application.use_cases.calendar_events import CalendarEventSource
from studio_booking.domain.entities.booking import BookingStatus
from studio_booking.infrastructure.store.memory_store import MemoryBookingStore


def _source(*bookings):
    store = MemoryBookingStore()
    for booking in bookings:
        store.add(booking)
    return CalendarEventSource(store), store


def test_only_pending_and_confirmed_are_visible():
    source, _ = _source(
        make_booking("b-confirmed", datetime(2025, 6, 3, 14, 0), status=BookingStatus.confirmed),
        make_booking("b-pending", datetime(2025, 6, 3, 10, 0)),
        make_booking("b-cancelled", datetime(2025, 6, 3, 12, 0), status=BookingStatus.cancelled),
        make_booking("b-rejected", datetime(2025, 6, 3, 16, 0), status=BookingStatus.rejected),
        make_booking("b-completed", datetime(2025, 6, 2, 9, 0), status=BookingStatus.completed),
        make_booking("b-no-show", datetime(2025, 6, 2, 11, 0), status=BookingStatus.no_show),
        make_booking("b-other-artist", datetime(2025, 6, 3, 9, 0), artist_id="artist-2"),
    )

    events = source.list_events("artist-1")

    assert [e.id for e in events] == ["b-pending", "b-confirmed"]
    assert events[0].booking_id == "b-pending"
    assert events[0].client_email == "b-pending@example.com"


def test_list_events_range_filter():
    source, _ = _source(
        make_booking("early", datetime(2025, 6, 3, 9, 0)),
        make_booking("late", datetime(2025, 6, 5, 9, 0)),
    )

    events = source.list_events("artist-1", datetime(2025, 6, 4, 0, 0), datetime(2025, 6, 6, 0, 0))

    assert [e.id for e in events] == ["late"]


def test_cancelling_removes_appointment_from_read_model():
    source, store = _source(make_booking("b1", datetime(2025, 6, 3, 9, 0)))
    assert len(source.list_events("artist-1")) == 1

    store.add(make_booking("b1", datetime(2025, 6, 3, 9, 0), status=BookingStatus.cancelled))

    assert source.list_events("artist-1") == []


def test_overlap_is_half_open():
    source, _ = _source(make_booking("b1", datetime(2025, 6, 3, 10, 0), minutes=60))

    assert source.check_overlap("artist-1", None, datetime(2025, 6, 3, 10, 30), datetime(2025, 6, 3, 11, 30))
    assert source.check_overlap("artist-1", None, datetime(2025, 6, 3, 9, 0), datetime(2025, 6, 3, 12, 0))
    assert not source.check_overlap("artist-1", None, datetime(2025, 6, 3, 11, 0), datetime(2025, 6, 3, 12, 0))
    assert not source.check_overlap("artist-1", None, datetime(2025, 6, 3, 9, 0), datetime(2025, 6, 3, 10, 0))


def test_overlap_excludes_the_moved_booking_and_inactive_ones():
    source, _ = _source(
        make_booking("b1", datetime(2025, 6, 3, 10, 0)),
        make_booking("b2", datetime(2025, 6, 3, 12, 0), status=BookingStatus.cancelled),
    )

    assert not source.check_overlap("artist-1", "b1", datetime(2025, 6, 3, 10, 30), datetime(2025, 6, 3, 11, 30))
    assert not source.check_overlap("artist-1", None, datetime(2025, 6, 3, 12, 0), datetime(2025, 6, 3, 13, 0))


def test_reschedule_updates_owned_booking():
    source, store = _source(make_booking("b1", datetime(2025, 6, 3, 10, 0)))

    source.reschedule("artist-1", "b1", datetime(2025, 6, 4, 15, 0), datetime(2025, 6, 4, 16, 0))

    booking = store.get("b1")
    assert booking.start == datetime(2025, 6, 4, 15, 0)
    assert booking.end == datetime(2025, 6, 4, 16, 0)


def test_reschedule_fails_closed_on_resource_mismatch():
    source, store = _source(make_booking("b1", datetime(2025, 6, 3, 10, 0)))

    with pytest.raises(ResourceMismatchError):
        source.reschedule("artist-2", "b1", datetime(2025, 6, 4, 15, 0), datetime(2025, 6, 4, 16, 0))
    with pytest.raises(ResourceMismatchError):
        source.reschedule("artist-1", "missing", datetime(2025, 6, 4, 15, 0), datetime(2025, 6, 4, 16, 0))

    assert store.get("b1").start == datetime(2025, 6, 3, 10, 0)


def test_move_appointment_refuses_taken_slot():
    source, store = _source(
        make_booking("b1", datetime(2025, 6, 3, 10, 0)),
        make_booking("b2", datetime(2025, 6, 3, 14, 0)),
    )

    result = source.move_appointment("artist-1", "b1", datetime(2025, 6, 3, 14, 30), datetime(2025, 6, 3, 15, 30))

    assert result.available is False
    assert result.reason
    assert store.get("b1").start == datetime(2025, 6, 3, 10, 0)

    result = source.move_appointment("artist-1", "b1", datetime(2025, 6, 3, 15, 0), datetime(2025, 6, 3, 16, 0))
    assert result.available is True
    assert store.get("b1").start == datetime(2025, 6, 3, 15, 0)


def test_check_slot_availability_rejects_empty_interval():
    source, _ = _source()
    result = source.check_slot_availability("artist-1", None, datetime(2025, 6, 3, 10, 0), datetime(2025, 6, 3, 10, 0))
    assert result.available is False
