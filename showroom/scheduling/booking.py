"""
Booking service: the only component that reads from and writes to the
appointment store.

A booking is validated twice. The first check reads the day's
appointments and the customer's week, and rejects conflicts. The recheck
repeats the same reads immediately before the write so that two
near-simultaneous requests rarely both get through. Without a unique
constraint at the store this narrows the race, it does not close it;
when the store does enforce one, its violation is reported as
``SlotTakenError`` exactly like a failed check.

Status changes have the same read-then-write shape: two staff members
can both read ``pending`` before one of them cancels. ``set_status``
passes the status it validated against as ``expected_status``, and the
store rejects the write with ``InvalidTransitionError`` when the row has
moved on, so a cancelled appointment is never revived.
"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional, Union

from showroom.config import SchedulingConfig, settings
from showroom.schemas.appointment_schema import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    Caller,
)
from showroom.scheduling.availability import (
    SlotAvailability,
    available_slot_list,
    find_weekly_conflict,
    is_slot_taken,
    week_window,
)
from showroom.scheduling.calendar import WeekGrid, build_week_grid
from showroom.scheduling.clock import Clock, SystemClock
from showroom.scheduling.errors import (
    AppointmentNotFoundError,
    InvalidTransitionError,
    InvalidSlotError,
    PastDateError,
    PermissionDeniedError,
    SchedulingError,
    SlotTakenError,
    StoreError,
    UniqueViolationError,
    WeeklyLimitError,
)
from showroom.scheduling.slots import generate_slots
from showroom.scheduling.state_machine import validate_transition
from showroom.store.base import AppointmentStore
from showroom.utils import normalize_time, parse_date

logger = logging.getLogger(__name__)


class BookingService:
    """Validates, rechecks and persists showroom appointments."""

    def __init__(
        self,
        store: AppointmentStore,
        clock: Optional[Clock] = None,
        config: Optional[SchedulingConfig] = None,
    ) -> None:
        self.store = store
        self.config = config or settings.scheduling
        self.clock = clock or SystemClock(self.config.timezone)

    # ------------------------------------------------------------------ #
    # Bookings
    # ------------------------------------------------------------------ #

    def request_booking(
        self, customer_id: str, day: Union[date, str], time: str
    ) -> Appointment:
        """Book a visit on behalf of a customer. The appointment starts pending."""
        return self._book(customer_id, parse_date(day), time, AppointmentStatus.PENDING)

    def create_for_customer(
        self, staff: Caller, customer_id: str, day: Union[date, str], time: str
    ) -> Appointment:
        """Book a visit from the staff console. The appointment starts confirmed."""
        self._require_staff(staff, "create appointments for customers")
        return self._book(
            customer_id,
            parse_date(day),
            time,
            AppointmentStatus.CONFIRMED,
            created_by=staff.user_id,
        )

    def _book(
        self,
        customer_id: str,
        day: date,
        time: str,
        status: AppointmentStatus,
        created_by: Optional[str] = None,
    ) -> Appointment:
        slot = self._validate_request(day, time)

        # First check: what the caller was shown.
        self._check_conflicts(customer_id, day, slot, phase="check")
        # Recheck against a fresh read; nothing else may happen before the write.
        self._check_conflicts(customer_id, day, slot, phase="recheck")

        payload = AppointmentCreate(
            customer_id=customer_id,
            date=day,
            time=slot,
            status=status,
            created_by=created_by,
        )
        try:
            with self._store_call("create"):
                appointment = self.store.create(payload)
        except UniqueViolationError:
            logger.warning(
                "Store rejected duplicate slot %s %s for %s", day, slot, customer_id
            )
            raise SlotTakenError(day, slot) from None

        logger.info(
            "Appointment %s created for %s on %s at %s (%s)",
            appointment.id, customer_id, day, slot, status.value,
        )
        return appointment

    def _validate_request(self, day: date, time: str) -> str:
        today = self.clock.today()
        if day < today:
            logger.info("Rejected past date %s (today is %s)", day, today)
            raise PastDateError(day, today)

        slot = normalize_time(time)
        if slot not in generate_slots(self.config):
            logger.info("Rejected invalid slot %r", time)
            raise InvalidSlotError(time)
        return slot

    def _check_conflicts(self, customer_id: str, day: date, slot: str, phase: str) -> None:
        first, last = week_window(day, self.config.week_start)
        with self._store_call("list_by_customer"):
            customer_week = self.store.list_by_customer(customer_id, first, last)
        with self._store_call("list_by_date"):
            same_day = self.store.list_by_date(day)

        conflict = find_weekly_conflict(customer_id, day, customer_week, self.config.week_start)
        if conflict is not None:
            logger.info(
                "Weekly limit hit at %s for %s: already booked %s (%s)",
                phase, customer_id, conflict.date, conflict.id,
            )
            raise WeeklyLimitError(customer_id, conflict)

        if is_slot_taken(day, slot, same_day):
            logger.info("Slot %s %s taken at %s", day, slot, phase)
            raise SlotTakenError(day, slot)

    # ------------------------------------------------------------------ #
    # Staff operations
    # ------------------------------------------------------------------ #

    def set_status(
        self, staff: Caller, appointment_id: str, new_status: AppointmentStatus
    ) -> Appointment:
        """Confirm or cancel an appointment from the staff console."""
        self._require_staff(staff, "change appointment status")
        try:
            new_status = AppointmentStatus(new_status)
        except ValueError:
            known = [s.value for s in AppointmentStatus]
            raise InvalidTransitionError(
                f"Unknown status {new_status!r}. Known statuses: {known}"
            ) from None
        current = self._get_or_raise(appointment_id)
        validate_transition(current.status, new_status)

        # The store refuses the write if the status moved since the read above.
        with self._store_call("update_status"):
            updated = self.store.update_status(
                appointment_id, new_status, expected_status=current.status
            )

        logger.info(
            "Appointment %s: %s -> %s by %s",
            appointment_id, current.status.value, new_status.value, staff.user_id,
        )
        return updated

    def delete_appointment(self, staff: Caller, appointment_id: str) -> None:
        """Administrative cleanup. Deleted rows take no part in conflict checks."""
        self._require_staff(staff, "delete appointments")
        with self._store_call("delete"):
            self.store.delete(appointment_id)
        logger.info("Appointment %s deleted by %s", appointment_id, staff.user_id)

    def appointments_by_status(
        self, staff: Caller, start: Union[date, str], end: Union[date, str]
    ) -> dict[AppointmentStatus, list[Appointment]]:
        """Group the appointments in ``[start, end]`` by status for the admin tabs."""
        self._require_staff(staff, "list all appointments")
        with self._store_call("list_between"):
            rows = self.store.list_between(parse_date(start), parse_date(end))
        grouped: dict[AppointmentStatus, list[Appointment]] = {s: [] for s in AppointmentStatus}
        for appt in rows:
            grouped[appt.status].append(appt)
        return grouped

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def available_slots(self, day: Union[date, str]) -> list[SlotAvailability]:
        day = parse_date(day)
        with self._store_call("list_by_date"):
            appointments = self.store.list_by_date(day)
        return available_slot_list(day, appointments, self.config)

    def weekly_conflict(
        self, customer_id: str, day: Union[date, str]
    ) -> Optional[Appointment]:
        """The customer's existing appointment in the week of ``day``, if any."""
        day = parse_date(day)
        first, last = week_window(day, self.config.week_start)
        with self._store_call("list_by_customer"):
            rows = self.store.list_by_customer(customer_id, first, last)
        return find_weekly_conflict(customer_id, day, rows, self.config.week_start)

    def customer_appointments(self, customer_id: str) -> list[Appointment]:
        with self._store_call("list_by_customer"):
            rows = self.store.list_by_customer(customer_id)
        return sorted(rows, key=lambda a: (a.date, normalize_time(a.time)))

    def week_calendar(self, anchor: Union[date, str]) -> WeekGrid:
        """Build the week grid from a single read of the store."""
        anchor = parse_date(anchor)
        first, last = week_window(anchor, self.config.week_start)
        with self._store_call("list_between"):
            snapshot = self.store.list_between(first, last)
        return build_week_grid(anchor, snapshot, self.config)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _get_or_raise(self, appointment_id: str) -> Appointment:
        with self._store_call("get"):
            appointment = self.store.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    @staticmethod
    def _require_staff(caller: Caller, action: str) -> None:
        if not caller.is_staff:
            logger.warning("Non-staff caller %s tried to %s", caller.user_id, action)
            raise PermissionDeniedError(f"Only staff can {action}.")

    @staticmethod
    @contextmanager
    def _store_call(operation: str) -> Iterator[None]:
        """Let scheduling errors through and wrap anything else as StoreError."""
        try:
            yield
        except SchedulingError:
            raise
        except Exception as exc:
            logger.error("Store %s failed: %s", operation, exc)
            raise StoreError(f"Appointment store {operation} failed: {exc}", operation) from exc
