"""
Week calendar projection for the staff console and the customer modal.

The grid is derived only from the generated slot list and the supplied
appointments; it holds no logic of its own. Cells list every
non-cancelled appointment they contain, so a double booking that slipped
past the recheck shows up as a cell with two entries.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from showroom.config import SchedulingConfig, settings
from showroom.schemas.appointment_schema import Appointment
from showroom.scheduling.availability import week_window
from showroom.scheduling.slots import generate_slots
from showroom.utils import normalize_time


@dataclass
class WeekGrid:
    """Seven days by slot-count cells of appointments."""

    week_start: date
    days: list[date]
    slots: tuple[str, ...]
    cells: list[list[list[Appointment]]]
    unplaced: list[Appointment] = field(default_factory=list)

    def cell(self, day: date, time: str) -> list[Appointment]:
        """Appointments in the cell for ``day`` and ``time``."""
        try:
            day_index = self.days.index(day)
            slot_index = self.slots.index(normalize_time(time))
        except ValueError:
            raise KeyError(f"No cell for {day} at {time} in week of {self.week_start}") from None
        return self.cells[day_index][slot_index]

    def occupied_cells(self) -> list[tuple[date, str]]:
        return [
            (day, slot)
            for day, row in zip(self.days, self.cells)
            for slot, entries in zip(self.slots, row)
            if entries
        ]

    def double_booked_cells(self) -> list[tuple[date, str]]:
        """Cells holding more than one appointment, for staff to resolve."""
        return [
            (day, slot)
            for day, row in zip(self.days, self.cells)
            for slot, entries in zip(self.slots, row)
            if len(entries) > 1
        ]

    def staff_view(self) -> list[dict]:
        """Rows per day with customer identity and status per entry."""
        return [
            {
                "date": day.isoformat(),
                "slots": {
                    slot: [
                        {
                            "id": appt.id,
                            "customer_id": appt.customer_id,
                            "status": appt.status.value,
                        }
                        for appt in entries
                    ]
                    for slot, entries in zip(self.slots, row)
                },
            }
            for day, row in zip(self.days, self.cells)
        ]

    def customer_view(self) -> list[dict]:
        """Rows per day exposing only whether each slot is occupied."""
        return [
            {
                "date": day.isoformat(),
                "slots": {slot: bool(entries) for slot, entries in zip(self.slots, row)},
            }
            for day, row in zip(self.days, self.cells)
        ]


def build_week_grid(
    anchor: date,
    appointments: Iterable[Appointment],
    config: Optional[SchedulingConfig] = None,
) -> WeekGrid:
    """Assemble the grid for the week containing ``anchor``."""
    config = config or settings.scheduling
    first, last = week_window(anchor, config.week_start)
    days = [first + timedelta(days=offset) for offset in range(7)]
    slots = generate_slots(config)
    slot_index = {slot: i for i, slot in enumerate(slots)}
    cells: list[list[list[Appointment]]] = [[[] for _ in slots] for _ in days]
    unplaced: list[Appointment] = []

    ordered = sorted(appointments, key=lambda a: (a.date, normalize_time(a.time), a.created_at))
    for appt in ordered:
        if not appt.is_active or not first <= appt.date <= last:
            continue
        index = slot_index.get(normalize_time(appt.time))
        if index is None:
            unplaced.append(appt)
            continue
        cells[(appt.date - first).days][index].append(appt)

    return WeekGrid(week_start=first, days=days, slots=slots, cells=cells, unplaced=unplaced)
