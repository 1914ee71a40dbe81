"""
Availability resolution over a snapshot of appointments.

Everything here is pure: callers pass in the appointments they fetched
(for one date, one customer, or the whole table) and filtering happens
inside. Only pending and confirmed appointments occupy a slot or count
toward the one-visit-per-week limit.

Week windows use a fixed day-of-week numbering. With the default
"sunday" convention Sunday is day 0 and Saturday day 6; with "monday"
Monday is day 0. The calendar grid uses the same rule.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, Optional, TypedDict

from showroom.config import SchedulingConfig, settings
from showroom.schemas.appointment_schema import Appointment
from showroom.scheduling.slots import generate_slots
from showroom.utils import normalize_time

logger = logging.getLogger(__name__)


class SlotAvailability(TypedDict):
    """A single slot on a given date, as shown in the booking modal."""

    date: str
    time: str
    is_available: bool


def day_of_week(day: date, week_start: Optional[str] = None) -> int:
    """Position of ``day`` within its week, 0 being the first day."""
    week_start = week_start or settings.scheduling.week_start
    if week_start == "monday":
        return day.weekday()
    return (day.weekday() + 1) % 7


def week_window(day: date, week_start: Optional[str] = None) -> tuple[date, date]:
    """Return the inclusive (first, last) dates of the week containing ``day``."""
    first = day - timedelta(days=day_of_week(day, week_start))
    return first, first + timedelta(days=6)


def find_slot_occupants(
    day: date, time: str, appointments: Iterable[Appointment]
) -> list[Appointment]:
    """Non-cancelled appointments holding ``time`` on ``day``."""
    wanted = normalize_time(time)
    return [
        appt
        for appt in appointments
        if appt.date == day and appt.is_active and normalize_time(appt.time) == wanted
    ]


def is_slot_taken(day: date, time: str, appointments: Iterable[Appointment]) -> bool:
    return bool(find_slot_occupants(day, time, appointments))


def resolve_availability(
    day: date,
    appointments: Iterable[Appointment],
    config: Optional[SchedulingConfig] = None,
) -> dict[str, bool]:
    """
    Map every generated slot to whether it can still be booked on ``day``.

    The result has exactly one entry per slot, in slot order. Past dates
    are resolved like any other; rejecting them is the booking service's job.
    """
    taken = {
        normalize_time(appt.time)
        for appt in appointments
        if appt.date == day and appt.is_active
    }
    return {slot: slot not in taken for slot in generate_slots(config)}


def available_slot_list(
    day: date,
    appointments: Iterable[Appointment],
    config: Optional[SchedulingConfig] = None,
) -> list[SlotAvailability]:
    """List form of :func:`resolve_availability`."""
    return [
        {"date": day.isoformat(), "time": slot, "is_available": free}
        for slot, free in resolve_availability(day, appointments, config).items()
    ]


def find_weekly_conflict(
    customer_id: str,
    day: date,
    appointments: Iterable[Appointment],
    week_start: Optional[str] = None,
) -> Optional[Appointment]:
    """
    First non-cancelled appointment of ``customer_id`` in the week of ``day``.

    Scans all of the customer's appointments and compares week windows,
    so an appointment on any other day of the same week is a conflict.
    """
    first, last = week_window(day, week_start)
    conflicts = sorted(
        (
            appt
            for appt in appointments
            if appt.customer_id == customer_id
            and appt.is_active
            and first <= appt.date <= last
        ),
        key=lambda appt: (appt.date, normalize_time(appt.time)),
    )
    if conflicts:
        logger.debug(
            "Weekly conflict for %s in week %s..%s: %s",
            customer_id, first, last, conflicts[0].id,
        )
        return conflicts[0]
    return None


def has_conflicting_weekly_appointment(
    customer_id: str,
    day: date,
    appointments: Iterable[Appointment],
    week_start: Optional[str] = None,
) -> bool:
    return find_weekly_conflict(customer_id, day, appointments, week_start) is not None
