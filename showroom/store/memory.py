"""
In-memory appointment store.

Used by tests, the console demo and local development. With
``enforce_unique_slot=True`` it behaves like a backend with a partial
unique index on non-cancelled ``(date, time)`` rows.
"""

import logging
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from showroom.schemas.appointment_schema import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
)
from showroom.scheduling.errors import (
    AppointmentNotFoundError,
    InvalidTransitionError,
    UniqueViolationError,
)
from showroom.store.base import AppointmentStore
from showroom.utils import normalize_time

logger = logging.getLogger(__name__)


def _sort_key(appt: Appointment) -> tuple:
    return (appt.date, normalize_time(appt.time), appt.created_at)


class InMemoryAppointmentStore(AppointmentStore):
    """Dict-backed store guarded by a lock."""

    def __init__(self, enforce_unique_slot: bool = False) -> None:
        self.enforce_unique_slot = enforce_unique_slot
        self._appointments: dict[str, Appointment] = {}
        self._lock = threading.Lock()

    def create(self, payload: AppointmentCreate) -> Appointment:
        now = datetime.now(timezone.utc)
        with self._lock:
            if self.enforce_unique_slot and payload.status != AppointmentStatus.CANCELLED:
                self._check_unique(payload.date, payload.time, "create")
            appointment = Appointment(
                id=f"APT-{uuid.uuid4().hex[:8].upper()}",
                customer_id=payload.customer_id,
                date=payload.date,
                time=payload.time,
                status=payload.status,
                created_by=payload.created_by,
                created_at=now,
                updated_at=now,
            )
            self._appointments[appointment.id] = appointment
        logger.debug("Stored %s for %s on %s at %s", appointment.id,
                     appointment.customer_id, appointment.date, appointment.time)
        return appointment

    def add(self, appointment: Appointment) -> Appointment:
        """Insert a fully-formed record as-is, bypassing uniqueness checks."""
        with self._lock:
            self._appointments[appointment.id] = appointment
        return appointment

    def get(self, appointment_id: str) -> Optional[Appointment]:
        return self._appointments.get(appointment_id)

    def list_by_date(self, day: date) -> list[Appointment]:
        return self._select(lambda a: a.date == day)

    def list_by_customer(
        self,
        customer_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Appointment]:
        return self._select(
            lambda a: a.customer_id == customer_id
            and (start is None or a.date >= start)
            and (end is None or a.date <= end)
        )

    def list_between(self, start: date, end: date) -> list[Appointment]:
        return self._select(lambda a: start <= a.date <= end)

    def update_status(
        self,
        appointment_id: str,
        status: AppointmentStatus,
        expected_status: Optional[AppointmentStatus] = None,
    ) -> Appointment:
        with self._lock:
            current = self._appointments.get(appointment_id)
            if current is None:
                raise AppointmentNotFoundError(appointment_id)
            if expected_status is not None and current.status != expected_status:
                raise InvalidTransitionError(
                    f"Appointment {appointment_id} is '{current.status.value}', "
                    f"expected '{expected_status.value}'"
                )
            updated = current.model_copy(
                update={"status": status, "updated_at": datetime.now(timezone.utc)}
            )
            self._appointments[appointment_id] = updated
        return updated

    def delete(self, appointment_id: str) -> None:
        with self._lock:
            if self._appointments.pop(appointment_id, None) is None:
                raise AppointmentNotFoundError(appointment_id)
        logger.debug("Deleted %s", appointment_id)

    def reset(self) -> None:
        """Clear all appointments. Used by test fixtures for isolation."""
        with self._lock:
            self._appointments.clear()

    def __len__(self) -> int:
        return len(self._appointments)

    def _select(self, predicate) -> list[Appointment]:
        with self._lock:
            rows = [a for a in self._appointments.values() if predicate(a)]
        return sorted(rows, key=_sort_key)

    def _check_unique(self, day: date, time: str, operation: str) -> None:
        wanted = normalize_time(time)
        for existing in self._appointments.values():
            if existing.date == day and existing.is_active and normalize_time(existing.time) == wanted:
                raise UniqueViolationError(
                    f"duplicate key value violates unique constraint on ({day}, {wanted})",
                    operation=operation,
                )
