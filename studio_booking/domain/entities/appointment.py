from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from studio_booking.domain.entities.booking import Booking


@dataclass(frozen=True)
class Appointment:
    """Calendar projection of a pending or confirmed booking."""

    id: str
    start: datetime
    end: datetime
    client_name: str | None
    client_email: str
    booking_id: str

    @classmethod
    def from_booking(cls, booking: Booking) -> "Appointment":
        return cls(
            id=booking.id,
            start=booking.start,
            end=booking.end,
            client_name=booking.client_name,
            client_email=booking.client_email,
            booking_id=booking.id,
        )

    @property
    def title(self) -> str:
        return self.client_name or "Client"

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return start < self.end and end > self.start


@dataclass(frozen=True)
class AvailabilityConflict:
    booking_id: str
    day: int  # 0 = Monday
    hour: int
    slot_key: str
    date: datetime
    client_name: str | None


@dataclass(frozen=True)
class SlotAvailability:
    available: bool
    reason: str | None = None


class TimeOfDay(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    any = "any"


@dataclass(frozen=True)
class ClientPreferences:
    preferred_time_of_day: TimeOfDay | None = None
    # None means "not disabled"; only an explicit False turns grouping off.
    prefer_group_with_other_appointments: bool | None = None


@dataclass(frozen=True)
class SuggestedSlot:
    start: datetime
    end: datetime
    score: int

    @property
    def id(self) -> str:
        minutes = int((self.end - self.start).total_seconds() // 60)
        return f"{self.start.isoformat()}-{minutes}"
