from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from studio_booking.domain.entities.payment_event import PaymentEvent, PaymentEventKind

SUCCESS_EVENT_TYPES = frozenset({"payment_intent.succeeded", "checkout.session.completed"})
FAILURE_EVENT_TYPES = frozenset({"payment_intent.payment_failed"})


class PaymentEventDataDTO(BaseModel):
    object: dict[str, Any] = Field(default_factory=dict)


class PaymentEventDTO(BaseModel):
    id: str = ""
    type: str = ""
    data: PaymentEventDataDTO = Field(default_factory=PaymentEventDataDTO)

    def to_event(self) -> PaymentEvent:
        obj = self.data.object or {}
        metadata = obj.get("metadata") or {}
        booking_reference = metadata.get("booking_id") or metadata.get("bookingId")
        payment_reference = obj.get("id")
        amount = obj.get("amount") if obj.get("amount") is not None else obj.get("amount_total")

        if self.type in SUCCESS_EVENT_TYPES:
            kind = PaymentEventKind.succeeded
        elif self.type in FAILURE_EVENT_TYPES:
            kind = PaymentEventKind.failed
        else:
            kind = PaymentEventKind.other

        return PaymentEvent(
            id=self.id,
            type=self.type,
            kind=kind,
            booking_reference=str(booking_reference) if booking_reference else None,
            payment_reference=str(payment_reference) if payment_reference else None,
            amount=int(amount) if isinstance(amount, (int, float)) else None,
            currency=obj.get("currency"),
        )
