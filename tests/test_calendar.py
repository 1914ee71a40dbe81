"""Tests for the week calendar projection."""

from datetime import date

import pytest

from showroom.config import SchedulingConfig
from showroom.schemas.appointment_schema import AppointmentStatus
from showroom.scheduling.calendar import build_week_grid
from tests.conftest import make_appointment

WED = date(2025, 6, 11)


class TestGridShape:
    def test_seven_days_by_eighteen_slots(self):
        grid = build_week_grid(WED, [])
        assert len(grid.cells) == 7
        assert all(len(row) == 18 for row in grid.cells)

    def test_week_starts_on_sunday_by_default(self):
        grid = build_week_grid(WED, [])
        assert grid.week_start == date(2025, 6, 8)
        assert grid.days[-1] == date(2025, 6, 14)

    def test_monday_convention(self):
        config = SchedulingConfig(week_start="monday")
        grid = build_week_grid(WED, [], config)
        assert grid.days[0] == date(2025, 6, 9)


class TestGridAssembly:
    def test_confirmed_shown_cancelled_hidden(self):
        confirmed = make_appointment(WED, "14:30", AppointmentStatus.CONFIRMED)
        cancelled = make_appointment(WED, "09:00", AppointmentStatus.CANCELLED)
        grid = build_week_grid(WED, [confirmed, cancelled])
        assert grid.occupied_cells() == [(WED, "14:30")]
        assert grid.cell(WED, "09:00") == []
        assert grid.cell(WED, "14:30") == [confirmed]

    def test_appointments_outside_week_ignored(self):
        outside = make_appointment(date(2025, 6, 15), "10:00")
        grid = build_week_grid(WED, [outside])
        assert grid.occupied_cells() == []

    def test_seconds_suffix_placed_in_slot(self):
        appt = make_appointment(WED, "10:00:00")
        assert build_week_grid(WED, [appt]).cell(WED, "10:00") == [appt]

    def test_double_booking_is_surfaced(self):
        first = make_appointment(WED, "11:00")
        second = make_appointment(WED, "11:00", customer_id="customer-b")
        grid = build_week_grid(WED, [first, second])
        assert len(grid.cell(WED, "11:00")) == 2
        assert grid.double_booked_cells() == [(WED, "11:00")]

    def test_off_grid_times_listed_as_unplaced(self):
        legacy = make_appointment(WED, "18:00")
        grid = build_week_grid(WED, [legacy])
        assert grid.unplaced == [legacy]
        assert grid.occupied_cells() == []

    def test_cell_outside_grid_raises(self):
        grid = build_week_grid(WED, [])
        with pytest.raises(KeyError):
            grid.cell(date(2025, 6, 20), "10:00")


class TestViews:
    def setup_method(self):
        self.appt = make_appointment(WED, "14:30", AppointmentStatus.CONFIRMED,
                                     appointment_id="APT-1")
        self.grid = build_week_grid(WED, [self.appt])

    def test_staff_view_exposes_identity_and_status(self):
        wednesday = self.grid.staff_view()[3]
        assert wednesday["date"] == "2025-06-11"
        assert wednesday["slots"]["14:30"] == [
            {"id": "APT-1", "customer_id": "customer-a", "status": "confirmed"}
        ]

    def test_customer_view_hides_identity(self):
        wednesday = self.grid.customer_view()[3]
        assert wednesday["slots"]["14:30"] is True
        assert wednesday["slots"]["15:00"] is False
        assert "customer-a" not in repr(self.grid.customer_view())
