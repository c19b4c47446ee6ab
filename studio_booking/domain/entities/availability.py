from __future__ import annotations

from enum import Enum

DAYS_PER_WEEK = 7

# {"day-hour": True} marks a cell available; a missing or False entry is blocked.
Schedule = dict[str, bool]


class PaintMode(str, Enum):
    available = "available"
    blocked = "blocked"


def slot_key(day: int, hour: int) -> str:
    return f"{day}-{hour}"


def parse_slot_key(key: str) -> tuple[int, int]:
    day, hour = key.split("-", 1)
    return int(day), int(hour)


def is_available(schedule: Schedule, day: int, hour: int) -> bool:
    return schedule.get(slot_key(day, hour)) is True
