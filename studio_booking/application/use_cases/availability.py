from __future__ import annotations

import logging
from typing import Callable

from studio_booking.application.exceptions import SlotOutOfRangeError
from studio_booking.application.ports.availability_store import AvailabilityStorePort
from studio_booking.domain.entities.availability import (
    DAYS_PER_WEEK,
    PaintMode,
    Schedule,
    is_available,
    parse_slot_key,
    slot_key,
)

ChangeListener = Callable[[Schedule], None]


class AvailabilityStore:
    """
    Weekly grid of hourly cells for one artist.

    Single logical writer, last write wins. Reads hand out copies so that
    templates and callers never alias the live grid. Every write is persisted
    as one whole-grid save, then listeners are told about the new snapshot.
    """

    def __init__(
        self,
        artist_id: str,
        store: AvailabilityStorePort,
        hour_start: int = 8,
        hour_end: int = 20,
    ) -> None:
        if not 0 <= hour_start < hour_end <= 24:
            raise ValueError(f"Invalid operating window [{hour_start}, {hour_end})")
        self._artist_id = artist_id
        self._store = store
        self._hour_start = hour_start
        self._hour_end = hour_end
        self._schedule: Schedule = dict(store.load(artist_id))
        self._listeners: list[ChangeListener] = []
        self._logger = logging.getLogger(__name__)

    @property
    def artist_id(self) -> str:
        return self._artist_id

    @property
    def hour_start(self) -> int:
        return self._hour_start

    @property
    def hour_end(self) -> int:
        return self._hour_end

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def is_available(self, day: int, hour: int) -> bool:
        return is_available(self._schedule, day, hour)

    def set_slot(self, day: int, hour: int, is_available: bool, notify: bool = True) -> None:
        self._check_bounds(day, hour)
        key = slot_key(day, hour)
        if self._schedule.get(key) is is_available:
            return
        updated = dict(self._schedule)
        updated[key] = is_available
        self._commit(updated, notify)

    def toggle_slot(self, day: int, hour: int, mode: PaintMode | str) -> None:
        self.set_slot(day, hour, PaintMode(mode) is PaintMode.available)

    def copy(self) -> Schedule:
        return dict(self._schedule)

    def restore(self, snapshot: Schedule) -> None:
        """Replace the whole grid. Cells missing from the snapshot become blocked."""
        cleaned: Schedule = {}
        for key, value in snapshot.items():
            day, hour = parse_slot_key(key)
            self._check_bounds(day, hour)
            if value is True:
                cleaned[slot_key(day, hour)] = True
        self._commit(cleaned, notify=True)

    def _commit(self, schedule: Schedule, notify: bool) -> None:
        # Persist first so a storage failure leaves the live grid untouched.
        self._store.save(self._artist_id, schedule)
        self._schedule = schedule
        if notify:
            for listener in list(self._listeners):
                listener(dict(schedule))

    def _check_bounds(self, day: int, hour: int) -> None:
        if not 0 <= day < DAYS_PER_WEEK:
            raise SlotOutOfRangeError(f"Day must be between 0 and {DAYS_PER_WEEK - 1}, got {day}")
        if not self._hour_start <= hour < self._hour_end:
            raise SlotOutOfRangeError(
                f"Hour must be within [{self._hour_start}, {self._hour_end}), got {hour}"
            )
