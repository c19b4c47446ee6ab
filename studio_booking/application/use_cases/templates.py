from __future__ import annotations

import logging
import uuid
from datetime import datetime

from studio_booking.application.exceptions import TemplateNotFoundError
from studio_booking.application.ports.template_store import TemplateStorePort
from studio_booking.domain.entities.availability import Schedule
from studio_booking.domain.entities.template import AvailabilityTemplate

DEFAULT_TEMPLATE_NAME = "Standard week"


def total_hours(schedule: Schedule) -> int:
    """Number of available one-hour cells in a schedule."""
    return sum(1 for value in schedule.values() if value is True)


class TemplateManager:
    """Named, immutable snapshots of a weekly grid."""

    def __init__(self, store: TemplateStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def list(self) -> list[AvailabilityTemplate]:
        return self._store.list()

    def create(self, name: str, schedule: Schedule, recurrence: str = "weekly") -> str:
        if recurrence != "weekly":
            raise ValueError(f"Unsupported recurrence: {recurrence}")
        template = AvailabilityTemplate(
            id=str(uuid.uuid4()),
            name=name.strip() or DEFAULT_TEMPLATE_NAME,
            schedule=dict(schedule),
            recurrence=recurrence,
            created_at=datetime.now(),
        )
        self._store.add(template)
        self._logger.info("Template created", extra={"template_id": template.id, "hours": total_hours(schedule)})
        return template.id

    def delete(self, template_id: str) -> None:
        if not self._store.delete(template_id):
            raise TemplateNotFoundError(template_id)
        self._logger.info("Template deleted", extra={"template_id": template_id})

    def apply(self, template_id: str) -> Schedule:
        """
        Return a copy of the template's schedule. The caller must replace the
        live grid with it wholesale (AvailabilityStore.restore), never merge.
        """
        template = self._store.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return dict(template.schedule)
