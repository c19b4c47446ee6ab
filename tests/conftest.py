from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from studio_booking.domain.entities.booking import Booking, BookingStatus, PaymentStatus

# Monday 2 June 2025, 07:00 local time.
MONDAY_MORNING = datetime(2025, 6, 2, 7, 0)


def make_booking(
    booking_id: str,
    start: datetime,
    minutes: int = 60,
    artist_id: str = "artist-1",
    status: BookingStatus = BookingStatus.pending,
    payment_reference: str | None = None,
    client_name: str | None = "Alex",
    calendar_integration_id: str | None = None,
) -> Booking:
    return Booking(
        id=booking_id,
        artist_id=artist_id,
        start=start,
        end=start + timedelta(minutes=minutes),
        client_name=client_name,
        client_email=f"{booking_id}@example.com",
        status=status,
        payment_status=PaymentStatus.pending,
        payment_reference=payment_reference,
        calendar_integration_id=calendar_integration_id,
        created_at=MONDAY_MORNING,
    )


def full_week(hour_start: int = 8, hour_end: int = 20) -> dict[str, bool]:
    return {f"{day}-{hour}": True for day in range(7) for hour in range(hour_start, hour_end)}


@pytest.fixture
def monday_morning() -> datetime:
    return MONDAY_MORNING
