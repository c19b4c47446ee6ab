import logging

from fastapi import FastAPI

from studio_booking.api.v1.scheduling import router as scheduling_router
from studio_booking.api.webhooks import router as webhooks_router
from studio_booking.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "artist_id", "event_id", "event_type", "template_id", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Studio Booking Scheduling Engine", version="1.0.0")

app.include_router(webhooks_router, tags=["webhooks"])
app.include_router(scheduling_router, prefix="/api/v1", tags=["scheduling"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
