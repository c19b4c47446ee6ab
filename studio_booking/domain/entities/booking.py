from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    rejected = "rejected"
    cancelled = "cancelled"
    completed = "completed"
    no_show = "no_show"


class PaymentStatus(str, Enum):
    pending = "pending"
    deposit_paid = "deposit_paid"
    completed = "completed"


ACTIVE_STATUSES = frozenset({BookingStatus.pending, BookingStatus.confirmed})


@dataclass(frozen=True)
class Booking:
    id: str
    artist_id: str
    start: datetime
    end: datetime
    client_name: str | None
    client_email: str
    status: BookingStatus = BookingStatus.pending
    payment_status: PaymentStatus = PaymentStatus.pending
    payment_reference: str | None = None
    calendar_integration_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    confirmed_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def deposit_paid(self) -> bool:
        return self.payment_status in (PaymentStatus.deposit_paid, PaymentStatus.completed)


@dataclass(frozen=True)
class Artist:
    """Owner of a calendar. Cal.com identities are optional."""

    id: str
    email: str
    name: str = ""
    cal_com_username: str | None = None
    cal_com_event_type_id: str | None = None
