"""Tests for the in-memory appointment store."""

from datetime import date

import pytest

from showroom.schemas.appointment_schema import AppointmentCreate, AppointmentStatus
from showroom.scheduling.errors import (
    AppointmentNotFoundError,
    InvalidTransitionError,
    UniqueViolationError,
)
from showroom.store.memory import InMemoryAppointmentStore
from tests.conftest import make_appointment

DAY = date(2025, 6, 11)


def _payload(time="10:00", customer_id="customer-a", day=DAY, **kwargs):
    return AppointmentCreate(customer_id=customer_id, date=day, time=time, **kwargs)


class TestCreate:
    def test_assigns_id_and_timestamps(self, store):
        appt = store.create(_payload())
        assert appt.id.startswith("APT-")
        assert appt.created_at == appt.updated_at
        assert store.get(appt.id) == appt

    def test_default_status_is_pending(self, store):
        assert store.create(_payload()).status == AppointmentStatus.PENDING

    def test_duplicates_allowed_without_unique_index(self, store):
        store.create(_payload())
        store.create(_payload(customer_id="customer-b"))
        assert len(store.list_by_date(DAY)) == 2

    def test_unique_index_rejects_duplicate(self):
        store = InMemoryAppointmentStore(enforce_unique_slot=True)
        store.create(_payload())
        with pytest.raises(UniqueViolationError):
            store.create(_payload(time="10:00:00", customer_id="customer-b"))

    def test_unique_index_ignores_cancelled(self):
        store = InMemoryAppointmentStore(enforce_unique_slot=True)
        store.add(make_appointment(DAY, "10:00", AppointmentStatus.CANCELLED))
        store.create(_payload(customer_id="customer-b"))


class TestQueries:
    def test_list_by_customer_with_range(self, store):
        store.create(_payload(day=date(2025, 6, 9)))
        store.create(_payload(day=date(2025, 6, 20)))
        store.create(_payload(customer_id="customer-b"))
        rows = store.list_by_customer("customer-a", date(2025, 6, 8), date(2025, 6, 14))
        assert [a.date for a in rows] == [date(2025, 6, 9)]
        assert len(store.list_by_customer("customer-a")) == 2

    def test_list_between_is_inclusive_and_sorted(self, store):
        store.create(_payload(time="15:00", day=date(2025, 6, 14)))
        store.create(_payload(time="09:00", day=date(2025, 6, 8)))
        store.create(_payload(time="09:00", day=date(2025, 6, 15)))
        rows = store.list_between(date(2025, 6, 8), date(2025, 6, 14))
        assert [a.date for a in rows] == [date(2025, 6, 8), date(2025, 6, 14)]

    def test_empty_result_is_a_list(self, store):
        assert store.list_by_date(DAY) == []


class TestMutations:
    def test_update_status(self, store):
        appt = store.create(_payload())
        updated = store.update_status(appt.id, AppointmentStatus.CONFIRMED)
        assert updated.status == AppointmentStatus.CONFIRMED
        assert updated.updated_at >= appt.updated_at
        assert store.get(appt.id).status == AppointmentStatus.CONFIRMED

    def test_update_unknown(self, store):
        with pytest.raises(AppointmentNotFoundError):
            store.update_status("APT-NOPE", AppointmentStatus.CONFIRMED)

    def test_conditional_update_matches(self, store):
        appt = store.create(_payload())
        updated = store.update_status(
            appt.id, AppointmentStatus.CONFIRMED, expected_status=AppointmentStatus.PENDING
        )
        assert updated.status == AppointmentStatus.CONFIRMED

    def test_conditional_update_rejects_moved_status(self, store):
        appt = store.create(_payload())
        store.update_status(appt.id, AppointmentStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError, match="cancelled"):
            store.update_status(
                appt.id, AppointmentStatus.CONFIRMED, expected_status=AppointmentStatus.PENDING
            )
        assert store.get(appt.id).status == AppointmentStatus.CANCELLED

    def test_delete(self, store):
        appt = store.create(_payload())
        store.delete(appt.id)
        assert store.get(appt.id) is None

    def test_delete_unknown(self, store):
        with pytest.raises(AppointmentNotFoundError):
            store.delete("APT-NOPE")

    def test_reset(self, store):
        store.create(_payload())
        store.reset()
        assert len(store) == 0
