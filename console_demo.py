"""
Offline console demo: books showroom visits against an in-memory store.

Runs the real slot generator, availability resolver, booking service and
week calendar. No backend, no network calls. Designed for live demo
walkthroughs of the booking rules.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario weekly
    python console_demo.py --scenario race
    python console_demo.py --today 2025-06-10
"""

import argparse
import shlex
from datetime import date
from typing import Optional

from showroom.config import settings
from showroom.logging_context import request_scope
from showroom.schemas.appointment_schema import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    Caller,
)
from showroom.scheduling.booking import BookingService
from showroom.scheduling.calendar import WeekGrid
from showroom.scheduling.clock import Clock, FixedClock, SystemClock
from showroom.scheduling.errors import SchedulingError
from showroom.store.memory import InMemoryAppointmentStore
from showroom.utils import parse_date

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_TODAY = date(2025, 6, 10)

STAFF = Caller(user_id="staff-1", is_staff=True, display_name="Showroom desk")


class RacingStore(InMemoryAppointmentStore):
    """Slips a competing booking in between the first check and the recheck."""

    def __init__(self, competitor: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.competitor = competitor
        self._date_reads = 0

    def list_by_date(self, day: date) -> list[Appointment]:
        self._date_reads += 1
        if self._date_reads == 2:
            self.create(AppointmentCreate(customer_id=self.competitor, date=day, time="10:00"))
        return super().list_by_date(day)


class ConsoleSession:
    """Drives the booking service from the terminal."""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        store: Optional[InMemoryAppointmentStore] = None,
    ) -> None:
        self.clock = clock or SystemClock(settings.scheduling.timezone)
        self.store = store if store is not None else InMemoryAppointmentStore()
        self.service = BookingService(self.store, clock=self.clock)

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def fail(self, error: SchedulingError) -> None:
        print(f"{RED}{type(error).__name__}: {error}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #

    def book(self, customer_id: str, day: str, time: str) -> Optional[Appointment]:
        with request_scope() as request_id:
            self.system_log(f"request {request_id}")
            try:
                appt = self.service.request_booking(customer_id, day, time)
            except SchedulingError as exc:
                self.fail(exc)
                return None
        self.say(f"Booked {appt.id} for {customer_id} on {appt.date} at {appt.time} ({appt.status.value})")
        return appt

    def staff_book(self, customer_id: str, day: str, time: str) -> Optional[Appointment]:
        with request_scope() as request_id:
            self.system_log(f"request {request_id}")
            try:
                appt = self.service.create_for_customer(STAFF, customer_id, day, time)
            except SchedulingError as exc:
                self.fail(exc)
                return None
        self.say(f"Staff booked {appt.id} for {customer_id} on {appt.date} at {appt.time}")
        return appt

    def change_status(self, appointment_id: str, status: AppointmentStatus) -> None:
        try:
            appt = self.service.set_status(STAFF, appointment_id, status)
        except SchedulingError as exc:
            self.fail(exc)
            return
        self.say(f"{appt.id} is now {appt.status.value}")

    def show_slots(self, day: str) -> None:
        slots = self.service.available_slots(day)
        free = [s["time"] for s in slots if s["is_available"]]
        taken = [s["time"] for s in slots if not s["is_available"]]
        self.say(f"{day}: {len(free)} free, {len(taken)} taken")
        if taken:
            self.system_log(f"taken: {', '.join(taken)}")

    def show_mine(self, customer_id: str) -> None:
        rows = self.service.customer_appointments(customer_id)
        if not rows:
            self.say(f"{customer_id} has no appointments.")
        for appt in rows:
            self.say(f"{appt.id}  {appt.date}  {appt.time}  {appt.status.value}")

    def show_grid(self, anchor: str) -> None:
        print_grid(self.service.week_calendar(anchor))

    # ------------------------------------------------------------------ #
    # Scenarios
    # ------------------------------------------------------------------ #

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = {
            "booking": self._scenario_booking,
            "weekly": self._scenario_weekly,
            "race": self._scenario_race,
        }
        play = steps.get(scenario)
        if play is None:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SHOWROOM BOOKINGS - Scenario: {scenario}{RESET}")
        print(f"{BOLD}  Showroom: {settings.showroom_name}  Today: {self.clock.today()}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        play()
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def _scenario_booking(self) -> None:
        self.show_slots("2025-06-10")
        first = self.book("customer-a", "2025-06-10", "10:00")
        self.book("customer-b", "2025-06-10", "10:00")
        self.book("customer-a", "2025-06-09", "09:00")
        self.book("customer-b", "2025-06-10", "10:15")
        if first is not None:
            self.change_status(first.id, AppointmentStatus.CONFIRMED)
        self.show_grid("2025-06-10")

    def _scenario_weekly(self) -> None:
        self.staff_book("customer-a", "2025-06-18", "14:30")
        self.book("customer-a", "2025-06-16", "11:00")
        self.book("customer-a", "2025-06-23", "11:00")
        self.show_mine("customer-a")

    def _scenario_race(self) -> None:
        self.store = RacingStore(competitor="customer-b")
        self.service = BookingService(self.store, clock=self.clock)
        self.system_log("customer-b books 10:00 while customer-a is between check and recheck")
        self.book("customer-a", "2025-06-11", "10:00")
        self.show_grid("2025-06-11")

    # ------------------------------------------------------------------ #
    # Interactive shell
    # ------------------------------------------------------------------ #

    HELP = (
        "commands: slots DATE | book CUSTOMER DATE TIME | staff-book CUSTOMER DATE TIME | "
        "confirm ID | cancel ID | grid DATE | mine CUSTOMER | quit"
    )

    def run(self) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SHOWROOM BOOKINGS - Console Demo{RESET}")
        print(f"{BOLD}  Showroom: {settings.showroom_name}  Today: {self.clock.today()}{RESET}")
        print(f"{BOLD}  Type 'help' for commands, 'quit' to exit{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        while True:
            try:
                line = input(f"\n{BLUE}> {RESET}").strip()
            except EOFError:
                return
            if not line:
                continue
            if line.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self.handle(line)

    def handle(self, line: str) -> None:
        try:
            command, *args = shlex.split(line)
        except ValueError as exc:
            print(f"{YELLOW}{exc}{RESET}")
            return

        try:
            if command == "slots" and len(args) == 1:
                self.show_slots(args[0])
            elif command == "book" and len(args) == 3:
                self.book(*args)
            elif command == "staff-book" and len(args) == 3:
                self.staff_book(*args)
            elif command == "confirm" and len(args) == 1:
                self.change_status(args[0], AppointmentStatus.CONFIRMED)
            elif command == "cancel" and len(args) == 1:
                self.change_status(args[0], AppointmentStatus.CANCELLED)
            elif command == "grid" and len(args) == 1:
                self.show_grid(args[0])
            elif command == "mine" and len(args) == 1:
                self.show_mine(args[0])
            else:
                print(f"{YELLOW}{self.HELP}{RESET}")
        except ValueError as exc:
            print(f"{YELLOW}{exc}{RESET}")


def print_grid(grid: WeekGrid) -> None:
    """Render a week grid, one column per day, occupied cells highlighted."""
    header = "       " + " ".join(f"{d.strftime('%a %d'):>10}" for d in grid.days)
    print(f"\n{BOLD}Week of {grid.week_start}{RESET}")
    print(f"{BOLD}{header}{RESET}")
    for slot_index, slot in enumerate(grid.slots):
        cells = []
        for row in grid.cells:
            entries = row[slot_index]
            if not entries:
                cells.append(f"{DIM}{'.':>10}{RESET}")
            elif len(entries) > 1:
                cells.append(f"{RED}{'x' + str(len(entries)):>10}{RESET}")
            else:
                label = f"{entries[0].customer_id[:6]}:{entries[0].status.value[0]}"
                cells.append(f"{GREEN}{label:>10}{RESET}")
        print(f"{slot:>6} " + " ".join(cells))
    for day, slot in grid.double_booked_cells():
        print(f"{RED}Double booking on {day} at {slot}{RESET}")
    for appt in grid.unplaced:
        print(f"{YELLOW}Off-grid appointment {appt.id} at {appt.time} on {appt.date}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Showroom booking console demo.")
    parser.add_argument(
        "--scenario",
        choices=["booking", "weekly", "race"],
        default=None,
        help="Auto-play a scripted scenario instead of the interactive shell.",
    )
    parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="Freeze the clock at this date (YYYY-MM-DD).",
    )
    args = parser.parse_args()

    if args.today:
        clock: Clock = FixedClock.on(parse_date(args.today))
    elif args.scenario:
        clock = FixedClock.on(DEMO_TODAY)
    else:
        clock = SystemClock(settings.scheduling.timezone)

    session = ConsoleSession(clock=clock)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
