"""Shared test fixtures and helpers."""

from datetime import date, datetime, timezone
from itertools import count
from typing import Optional

import pytest

from showroom.schemas.appointment_schema import Appointment, AppointmentStatus, Caller
from showroom.scheduling.booking import BookingService
from showroom.scheduling.clock import FixedClock
from showroom.store.memory import InMemoryAppointmentStore

TODAY = date(2025, 6, 10)  # a Tuesday

_ids = count(1)


@pytest.fixture
def clock():
    return FixedClock.on(TODAY)


@pytest.fixture
def store():
    return InMemoryAppointmentStore()


@pytest.fixture
def service(store, clock):
    return BookingService(store, clock=clock)


@pytest.fixture
def staff():
    return Caller(user_id="staff-1", is_staff=True)


@pytest.fixture
def customer():
    return Caller(user_id="customer-a")


def make_appointment(
    day: date,
    time: str,
    status: AppointmentStatus = AppointmentStatus.PENDING,
    customer_id: str = "customer-a",
    appointment_id: Optional[str] = None,
) -> Appointment:
    """Helper to create an Appointment with sensible defaults."""
    created = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
    return Appointment(
        id=appointment_id or f"APT-TEST{next(_ids):04d}",
        customer_id=customer_id,
        date=day,
        time=time,
        status=status,
        created_at=created,
        updated_at=created,
    )
