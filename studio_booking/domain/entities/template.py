from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from studio_booking.domain.entities.availability import Schedule


@dataclass(frozen=True)
class AvailabilityTemplate:
    id: str
    name: str
    schedule: Schedule = field(default_factory=dict)
    recurrence: str = "weekly"
    created_at: datetime | None = None
