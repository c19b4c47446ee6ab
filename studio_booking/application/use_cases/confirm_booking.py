from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from studio_booking.application.ports.booking_store import BookingStorePort
from studio_booking.application.ports.calendar_integration import CalendarIntegrationPort
from studio_booking.application.ports.notifier import NotifierPort
from studio_booking.application.utils.side_effects import attempt
from studio_booking.domain.entities.booking import Booking, BookingStatus
from studio_booking.domain.entities.payment_event import PaymentEvent, PaymentEventKind


class ConfirmationOutcome(str, Enum):
    confirmed = "confirmed"
    already_confirmed = "already_confirmed"
    ignored_event_type = "ignored_event_type"
    payment_failed = "payment_failed"
    missing_reference = "missing_reference"
    unknown_booking = "unknown_booking"
    not_pending = "not_pending"
    reference_mismatch = "reference_mismatch"


class BookingConfirmationUseCase:
    """
    pending -> confirmed, driven by payment processor events.

    Safe under duplicate, concurrent and out-of-order delivery: the only write
    is a conditional update that re-asserts status == pending, so one delivery
    wins and the others see zero rows affected. A failed payment leaves the
    booking pending so the client can retry.
    """

    def __init__(
        self,
        store: BookingStorePort,
        calendar: CalendarIntegrationPort | None = None,
        notifier: NotifierPort | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._calendar = calendar
        self._notifier = notifier
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def handle(self, event: PaymentEvent) -> ConfirmationOutcome:
        ctx = {"event_id": event.id, "event_type": event.type, "booking_id": event.booking_reference}

        if event.kind is PaymentEventKind.failed:
            # Booking stays pending on purpose so the client can pay again.
            self._logger.info("Payment failed; booking left pending", extra=ctx)
            return ConfirmationOutcome.payment_failed
        if event.kind is not PaymentEventKind.succeeded:
            self._logger.info("Ignoring payment event", extra=ctx)
            return ConfirmationOutcome.ignored_event_type

        if not event.booking_reference:
            self._logger.info("Payment event without booking reference", extra=ctx)
            return ConfirmationOutcome.missing_reference

        booking = self._store.get(event.booking_reference)
        if booking is None:
            self._logger.warning("Payment event for unknown booking", extra=ctx)
            return ConfirmationOutcome.unknown_booking

        if booking.status is not BookingStatus.pending:
            self._logger.info("Booking not pending; nothing to do", extra={**ctx, "reason": booking.status.value})
            return ConfirmationOutcome.not_pending

        if not event.payment_reference or event.payment_reference != booking.payment_reference:
            self._logger.error(
                "Payment reference mismatch: expected %s, got %s",
                booking.payment_reference,
                event.payment_reference,
                extra={**ctx, "reason": "reference_mismatch"},
            )
            return ConfirmationOutcome.reference_mismatch

        integration_id = booking.calendar_integration_id or self._create_integration_booking(booking, ctx)

        affected = self._store.confirm_if_pending(booking.id, integration_id, self._clock())
        if affected == 0:
            self._logger.info("Booking already confirmed by a concurrent delivery", extra=ctx)
            return ConfirmationOutcome.already_confirmed

        self._logger.info("Booking confirmed", extra=ctx)
        self._notify(booking, ctx)
        return ConfirmationOutcome.confirmed

    def _create_integration_booking(self, booking: Booking, ctx: dict) -> str | None:
        if self._calendar is None:
            return None
        artist = self._store.get_artist(booking.artist_id)
        if artist is None or not artist.cal_com_event_type_id:
            return None

        calendar = self._calendar
        result = attempt(
            "Calendar integration booking",
            lambda: calendar.create_booking(
                resource_identity=artist.cal_com_username or artist.id,
                event_type_identity=artist.cal_com_event_type_id,
                start_time=booking.start,
                client_name=booking.client_name or booking.client_email,
                client_email=booking.client_email,
            ),
            self._logger,
            **ctx,
        )
        return str(result.value) if result.ok and result.value else None

    def _notify(self, booking: Booking, ctx: dict) -> None:
        if self._notifier is None:
            return
        artist = self._store.get_artist(booking.artist_id)
        if artist is None or not artist.email:
            self._logger.info("No artist email; skipping notification", extra=ctx)
            return
        confirmed = self._store.get(booking.id) or booking
        notifier = self._notifier
        attempt("Booking confirmation notification", lambda: notifier.booking_confirmed(artist, confirmed), self._logger, **ctx)
