"""
Appointment status state machine.

Every legal status change is listed explicitly. Anything not in the
table is rejected, including a "change" to the current status and every
change out of ``cancelled``.

    pending   -> confirmed
    pending   -> cancelled
    confirmed -> cancelled

Usage:
    validate_transition(AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)
    assert is_terminal(AppointmentStatus.CANCELLED)
"""

from dataclasses import dataclass

from showroom.schemas.appointment_schema import AppointmentStatus
from showroom.scheduling.errors import InvalidTransitionError


@dataclass(frozen=True)
class StatusTransition:
    """A single valid status change."""
    from_status: AppointmentStatus
    to_status: AppointmentStatus


TRANSITIONS: list[StatusTransition] = [
    StatusTransition(AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED),
    StatusTransition(AppointmentStatus.PENDING, AppointmentStatus.CANCELLED),
    StatusTransition(AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED),
]


def allowed_targets(status: AppointmentStatus) -> list[AppointmentStatus]:
    """Return the statuses reachable from ``status`` in one step."""
    return [t.to_status for t in TRANSITIONS if t.from_status == status]


def is_terminal(status: AppointmentStatus) -> bool:
    return not allowed_targets(status)


def validate_transition(current: AppointmentStatus, target: AppointmentStatus) -> None:
    """
    Check a status change against the transition table.

    Raises:
        InvalidTransitionError: If ``current -> target`` is not listed.
    """
    for t in TRANSITIONS:
        if t.from_status == current and t.to_status == target:
            return

    valid = [s.value for s in allowed_targets(current)]
    raise InvalidTransitionError(
        f"Cannot change status from '{current.value}' to '{target.value}'. "
        f"Allowed: {valid}"
    )
