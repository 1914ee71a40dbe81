"""Scheduling error taxonomy.

Every failure the booking core can report is a ``SchedulingError``.
Transport layers map these to user-facing messages; nothing here is
retried inside the core.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from showroom.schemas.appointment_schema import Appointment


class SchedulingError(Exception):
    """Base class for all scheduling failures."""


class PastDateError(SchedulingError):
    """Requested date precedes today."""

    def __init__(self, requested: date, today: date) -> None:
        self.requested = requested
        self.today = today
        super().__init__(f"Cannot book {requested.isoformat()}: date is before {today.isoformat()}.")


class InvalidSlotError(SchedulingError):
    """Requested time is not one of the generated slots."""

    def __init__(self, time: str) -> None:
        self.time = time
        super().__init__(f"'{time}' is not a bookable time slot.")


class WeeklyLimitError(SchedulingError):
    """Customer already holds a non-cancelled appointment in that week."""

    def __init__(self, customer_id: str, conflicting: "Appointment") -> None:
        self.customer_id = customer_id
        self.conflicting = conflicting
        super().__init__(
            f"Customer {customer_id} already has an appointment this week "
            f"on {conflicting.date.isoformat()}."
        )

    @property
    def conflicting_date(self) -> date:
        return self.conflicting.date


class SlotTakenError(SchedulingError):
    """The slot is occupied by another non-cancelled appointment."""

    def __init__(self, requested: date, time: str) -> None:
        self.requested = requested
        self.time = time
        super().__init__(
            f"The {time} slot on {requested.isoformat()} is already taken. "
            "Please choose another time."
        )


class InvalidTransitionError(SchedulingError):
    """Raised when a status change is not allowed from the current status."""


class PermissionDeniedError(SchedulingError):
    """A staff-only operation was called without a staff identity."""


class AppointmentNotFoundError(SchedulingError):
    """No appointment exists with the given id."""

    def __init__(self, appointment_id: str) -> None:
        self.appointment_id = appointment_id
        super().__init__(f"Appointment {appointment_id} not found.")


class StoreError(SchedulingError):
    """Opaque persistence failure; retryable at the transport layer."""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        self.operation = operation
        super().__init__(message)


class UniqueViolationError(StoreError):
    """The store rejected a write that would double-book a slot."""
