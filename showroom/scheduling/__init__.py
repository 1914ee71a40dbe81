from showroom.scheduling.availability import (
    SlotAvailability,
    find_weekly_conflict,
    has_conflicting_weekly_appointment,
    resolve_availability,
    week_window,
)
from showroom.scheduling.booking import BookingService
from showroom.scheduling.calendar import WeekGrid, build_week_grid
from showroom.scheduling.clock import FixedClock, SystemClock
from showroom.scheduling.errors import (
    AppointmentNotFoundError,
    InvalidSlotError,
    InvalidTransitionError,
    PastDateError,
    PermissionDeniedError,
    SchedulingError,
    SlotTakenError,
    StoreError,
    UniqueViolationError,
    WeeklyLimitError,
)
from showroom.scheduling.slots import generate_slots, is_valid_slot

__all__ = [
    "BookingService",
    "generate_slots",
    "is_valid_slot",
    "resolve_availability",
    "has_conflicting_weekly_appointment",
    "find_weekly_conflict",
    "week_window",
    "SlotAvailability",
    "build_week_grid",
    "WeekGrid",
    "FixedClock",
    "SystemClock",
    "SchedulingError",
    "PastDateError",
    "InvalidSlotError",
    "WeeklyLimitError",
    "SlotTakenError",
    "InvalidTransitionError",
    "PermissionDeniedError",
    "AppointmentNotFoundError",
    "StoreError",
    "UniqueViolationError",
]
