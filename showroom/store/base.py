"""
Appointment store interface.

In production this is the hosted data backend's ``rendezvous`` table
reached over its HTTP API. The scheduling core only needs the calls
below and never sees transactions.

Implementations raise ``StoreError`` for backend failures,
``UniqueViolationError`` when a partial unique index on non-cancelled
``(date, time)`` rejects a write, and ``AppointmentNotFoundError`` for
unknown ids. Empty lists are valid results, distinct from errors.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from showroom.schemas.appointment_schema import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
)


class AppointmentStore(ABC):
    """Persistence collaborator for appointments."""

    @abstractmethod
    def create(self, payload: AppointmentCreate) -> Appointment:
        """Persist a new appointment and return it with id and timestamps."""

    @abstractmethod
    def get(self, appointment_id: str) -> Optional[Appointment]:
        """Return the appointment or None."""

    @abstractmethod
    def list_by_date(self, day: date) -> list[Appointment]:
        """All appointments on ``day``, any status."""

    @abstractmethod
    def list_by_customer(
        self,
        customer_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Appointment]:
        """The customer's appointments, optionally within ``[start, end]``."""

    @abstractmethod
    def list_between(self, start: date, end: date) -> list[Appointment]:
        """All appointments with a date in ``[start, end]``."""

    @abstractmethod
    def update_status(
        self,
        appointment_id: str,
        status: AppointmentStatus,
        expected_status: Optional[AppointmentStatus] = None,
    ) -> Appointment:
        """Set the status and return the updated appointment.

        When ``expected_status`` is given the write is conditional: if the
        stored status differs, raise ``InvalidTransitionError`` and leave
        the row untouched.
        """

    @abstractmethod
    def delete(self, appointment_id: str) -> None:
        """Remove the appointment permanently."""
