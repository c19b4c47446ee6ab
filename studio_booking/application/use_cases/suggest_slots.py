"""
Slot suggestion: generate candidate start times from the weekly grid, drop the
ones that collide with appointments, score the rest and keep the best few.

Scoring, from a baseline of 100:
    +30  start inside the preferred window (morning 9-12, afternoon 14-18)
    +5   preference is "any"
    +25  at least one appointment on the same day (unless grouping is disabled)
    +15  per same-day appointment ending within 120 minutes of the candidate start
    +5   start in [8, 10) or [14, 16)

Ties keep generation order (earlier start first) because the sort is stable.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from studio_booking.application.use_cases.availability import AvailabilityStore
from studio_booking.application.use_cases.calendar_events import CalendarEventSource
from studio_booking.domain.entities.appointment import (
    Appointment,
    ClientPreferences,
    SuggestedSlot,
    TimeOfDay,
)
from studio_booking.domain.entities.availability import Schedule, is_available

BASE_SCORE = 100
PREFERRED_WINDOW_BONUS = 30
ANY_TIME_BONUS = 5
SAME_DAY_BONUS = 25
NEARBY_APPOINTMENT_BONUS = 15
NEARBY_GAP_MINUTES = 120
EARLY_SLOT_BONUS = 5

PREFERRED_WINDOWS: dict[TimeOfDay, tuple[float, float]] = {
    TimeOfDay.morning: (9, 12),
    TimeOfDay.afternoon: (14, 18),
}
EARLY_WINDOWS: tuple[tuple[float, float], ...] = ((8, 10), (14, 16))


def _fractional_hour(moment: datetime) -> float:
    return moment.hour + moment.minute / 60


def covers_available_cells(
    start: datetime,
    end: datetime,
    schedule: Schedule,
    hour_start: int,
    hour_end: int,
) -> bool:
    """Every hourly cell touched by [start, end) must be open and inside the operating window."""
    day = start.weekday()
    day_start = start.replace(hour=0, minute=0, second=0, microsecond=0)
    first_hour = start.hour
    end_minutes = int((end - day_start).total_seconds() // 60)
    last_hour = -(-end_minutes // 60)  # ceil
    for hour in range(first_hour, last_hour):
        if hour < hour_start or hour >= hour_end:
            return False
        if not is_available(schedule, day, hour):
            return False
    return True


def generate_candidates(
    duration_minutes: int,
    schedule: Schedule,
    now: datetime,
    hour_start: int = 8,
    hour_end: int = 20,
    days_ahead: int = 14,
    step_minutes: int = 30,
) -> list[tuple[datetime, datetime]]:
    candidates: list[tuple[datetime, datetime]] = []
    duration = timedelta(minutes=duration_minutes)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    for offset in range(days_ahead):
        day_start = today + timedelta(days=offset)
        closing = day_start + timedelta(hours=hour_end)
        for hour in range(hour_start, hour_end):
            for minute in range(0, 60, step_minutes):
                start = day_start + timedelta(hours=hour, minutes=minute)
                end = start + duration
                if end > closing:
                    continue
                # the last half hour of the day never opens a slot
                if hour == hour_end - 1 and minute >= 30:
                    continue
                if start < now:
                    continue
                if covers_available_cells(start, end, schedule, hour_start, hour_end):
                    candidates.append((start, end))
    return candidates


def _gap_minutes(start: datetime, appointment: Appointment) -> float:
    return abs((start - appointment.end).total_seconds()) / 60


def score_slot(
    start: datetime,
    end: datetime,
    preferences: ClientPreferences | None,
    appointments: list[Appointment],
) -> int:
    score = BASE_SCORE
    hour = _fractional_hour(start)
    preferred = preferences.preferred_time_of_day if preferences else None

    if preferred in PREFERRED_WINDOWS:
        low, high = PREFERRED_WINDOWS[preferred]
        if low <= hour < high:
            score += PREFERRED_WINDOW_BONUS
    elif preferred is TimeOfDay.any:
        score += ANY_TIME_BONUS

    same_day = [a for a in appointments if a.start.date() == start.date()]
    grouping_disabled = preferences is not None and preferences.prefer_group_with_other_appointments is False
    if same_day and not grouping_disabled:
        score += SAME_DAY_BONUS

    for appointment in same_day:
        if _gap_minutes(start, appointment) <= NEARBY_GAP_MINUTES:
            score += NEARBY_APPOINTMENT_BONUS

    for low, high in EARLY_WINDOWS:
        if low <= hour < high:
            score += EARLY_SLOT_BONUS

    return score


def suggest_best_slots(
    duration_minutes: int,
    preferences: ClientPreferences | None,
    schedule: Schedule,
    appointments: list[Appointment],
    now: datetime,
    hour_start: int = 8,
    hour_end: int = 20,
    days_ahead: int = 14,
    step_minutes: int = 30,
    limit: int = 5,
) -> list[SuggestedSlot]:
    if duration_minutes <= 0:
        return []

    candidates = generate_candidates(
        duration_minutes,
        schedule,
        now,
        hour_start=hour_start,
        hour_end=hour_end,
        days_ahead=days_ahead,
        step_minutes=step_minutes,
    )
    scored = [
        SuggestedSlot(start=start, end=end, score=score_slot(start, end, preferences, appointments))
        for start, end in candidates
        if not any(a.overlaps(start, end) for a in appointments)
    ]
    scored.sort(key=lambda slot: slot.score, reverse=True)
    return scored[:limit]


class SlotSuggestionEngine:
    """Read-only ranking over a point-in-time snapshot of the grid and the calendar."""

    def __init__(
        self,
        availability: AvailabilityStore,
        events: CalendarEventSource,
        days_ahead: int = 14,
        step_minutes: int = 30,
        limit: int = 5,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if step_minutes <= 0 or 60 % step_minutes != 0:
            raise ValueError(f"step_minutes must divide an hour, got {step_minutes}")
        self._availability = availability
        self._events = events
        self._days_ahead = days_ahead
        self._step_minutes = step_minutes
        self._limit = limit
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def suggest(
        self,
        duration_minutes: int,
        preferences: ClientPreferences | None = None,
    ) -> list[SuggestedSlot]:
        slots = suggest_best_slots(
            duration_minutes,
            preferences,
            self._availability.copy(),
            self._events.list_events(self._availability.artist_id),
            self._clock(),
            hour_start=self._availability.hour_start,
            hour_end=self._availability.hour_end,
            days_ahead=self._days_ahead,
            step_minutes=self._step_minutes,
            limit=self._limit,
        )
        self._logger.debug(
            "Slots suggested",
            extra={"artist_id": self._availability.artist_id, "count": len(slots)},
        )
        return slots
