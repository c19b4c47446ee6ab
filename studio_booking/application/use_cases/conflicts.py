from __future__ import annotations

import logging

from studio_booking.application.use_cases.availability import AvailabilityStore
from studio_booking.application.use_cases.calendar_events import CalendarEventSource
from studio_booking.domain.entities.appointment import Appointment, AvailabilityConflict
from studio_booking.domain.entities.availability import Schedule, is_available, slot_key


def detect_conflicts(schedule: Schedule, appointments: list[Appointment]) -> list[AvailabilityConflict]:
    """
    An appointment conflicts when the cell holding its start is not marked
    available. Only the start cell is checked, so a multi-hour appointment
    yields at most one conflict.
    """
    conflicts: list[AvailabilityConflict] = []
    for appointment in appointments:
        start = appointment.start
        day = start.weekday()
        hour = start.hour
        if not is_available(schedule, day, hour):
            conflicts.append(
                AvailabilityConflict(
                    booking_id=appointment.booking_id,
                    day=day,
                    hour=hour,
                    slot_key=slot_key(day, hour),
                    date=start,
                    client_name=appointment.client_name,
                )
            )
    return conflicts


class ConflictDetector:
    """Live conflict list for one artist, fully recomputed when the grid or its appointments change."""

    def __init__(self, availability: AvailabilityStore, events: CalendarEventSource) -> None:
        self._availability = availability
        self._events = events
        self._conflicts: list[AvailabilityConflict] = []
        self._logger = logging.getLogger(__name__)
        availability.subscribe(self._on_availability_changed)
        events.subscribe(self._on_appointments_changed)
        self.refresh()

    @property
    def conflicts(self) -> list[AvailabilityConflict]:
        return list(self._conflicts)

    def refresh(self) -> list[AvailabilityConflict]:
        """Recompute from the current grid and the current appointments."""
        return self._recompute(self._availability.copy())

    def mark_available(self, day: int, hour: int) -> list[AvailabilityConflict]:
        """
        Open one cell and drop the conflicts sitting on it. Other entries in the
        live list are kept as they are.
        """
        self._availability.set_slot(day, hour, True, notify=False)
        self._conflicts = [c for c in self._conflicts if c.day != day or c.hour != hour]
        return self.conflicts

    def _on_availability_changed(self, schedule: Schedule) -> None:
        self._recompute(schedule)

    def _on_appointments_changed(self, artist_id: str) -> None:
        if artist_id == self._availability.artist_id:
            self._recompute(self._availability.copy())

    def _recompute(self, schedule: Schedule) -> list[AvailabilityConflict]:
        appointments = self._events.list_events(self._availability.artist_id)
        self._conflicts = detect_conflicts(schedule, appointments)
        if self._conflicts:
            self._logger.info(
                "Availability conflicts detected",
                extra={"artist_id": self._availability.artist_id, "count": len(self._conflicts)},
            )
        return self.conflicts
