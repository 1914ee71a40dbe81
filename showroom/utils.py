"""Shared utilities used across the scheduling core."""

import re
from datetime import date, datetime
from typing import Union

_TIME_WITH_SECONDS = re.compile(r"^(\d{2}:\d{2}):00$")


def normalize_time(value: str) -> str:
    """Normalize a stored time-of-day to ``HH:MM``.

    Backends that store a SQL ``time`` column hand values back with a
    seconds suffix. Only an exact ``:00`` suffix is dropped.

    Examples:
        >>> normalize_time("09:00:00")
        '09:00'
        >>> normalize_time(" 14:30 ")
        '14:30'
        >>> normalize_time("10:00:30")
        '10:00:30'
    """
    value = value.strip()
    match = _TIME_WITH_SECONDS.match(value)
    if match:
        return match.group(1)
    return value


def parse_date(value: Union[str, date]) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string into a date.

    ``datetime`` values are truncated to their date; ``date`` values are
    returned unchanged.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"Invalid date, expected YYYY-MM-DD: {value!r}") from None
