"""
Slot generation for showroom visits.

Enumerates the bookable time-of-day values for a business day: start
inclusive, end exclusive, fixed step. With the default business hours
(09:00 to 18:00, 30 minutes) that is 18 slots, "09:00" through "17:30".
"""

from typing import Optional

from showroom.config import SchedulingConfig, settings
from showroom.utils import normalize_time


def _to_minutes(clock: str) -> int:
    hours, minutes = clock.split(":")
    return int(hours) * 60 + int(minutes)


def generate_slots(config: Optional[SchedulingConfig] = None) -> tuple[str, ...]:
    """Return the ordered, immutable sequence of slot start times."""
    config = config or settings.scheduling
    start = _to_minutes(config.opening_time)
    end = _to_minutes(config.closing_time)
    return tuple(
        f"{minute // 60:02d}:{minute % 60:02d}"
        for minute in range(start, end, config.slot_minutes)
    )


def is_valid_slot(time: str, config: Optional[SchedulingConfig] = None) -> bool:
    """Check that ``time`` (``HH:MM`` or ``HH:MM:00``) is a generated slot."""
    return normalize_time(time) in generate_slots(config)
