from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from studio_booking.application.dto.payment_event import PaymentEventDTO
from studio_booking.application.exceptions import AuthenticationFailure
from studio_booking.core.config import settings
from studio_booking.infrastructure.payments.webhook_verify import verify_payment_signature
from studio_booking.wiring.dependencies import get_booking_confirmation_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/webhooks/payments")
async def payment_webhook(request: Request) -> JSONResponse:
    body = await request.body()
    signature = request.headers.get("Stripe-Signature")
    try:
        verify_payment_signature(
            body,
            signature,
            settings.PAYMENT_WEBHOOK_SECRET,
            tolerance_seconds=settings.PAYMENT_SIGNATURE_TOLERANCE_SECONDS,
        )
    except AuthenticationFailure as e:
        logger.warning("Payment webhook rejected", extra={"reason": str(e)})
        return JSONResponse(status_code=401, content={"error": "Invalid signature"})

    # Past this point the processor always gets an acknowledgement, so it stops
    # retrying events that a retry cannot fix.
    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        event = PaymentEventDTO.model_validate(payload).to_event()
        use_case = get_booking_confirmation_use_case()
        outcome = await run_in_threadpool(use_case.handle, event)
        logger.info(
            "Payment event handled",
            extra={"event_id": event.id, "event_type": event.type, "reason": outcome.value},
        )
    except Exception as e:
        logger.exception("Error processing payment event", extra={"error": str(e)})

    return JSONResponse(status_code=200, content={"received": True})
