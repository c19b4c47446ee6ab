from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PaymentEventKind(str, Enum):
    succeeded = "succeeded"
    failed = "failed"
    other = "other"


@dataclass(frozen=True)
class PaymentEvent:
    id: str
    type: str
    kind: PaymentEventKind
    booking_reference: str | None
    payment_reference: str | None
    amount: int | None = None
    currency: str | None = None
