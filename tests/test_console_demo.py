"""Smoke tests for the offline console demo."""

from datetime import date

from console_demo import ConsoleSession
from showroom.scheduling.clock import FixedClock

TODAY = date(2025, 6, 10)


def _session() -> ConsoleSession:
    return ConsoleSession(clock=FixedClock.on(TODAY))


class TestScenarios:
    def test_booking_scenario(self, capsys):
        session = _session()
        session.run_scenario("booking")
        out = capsys.readouterr().out
        assert "SlotTakenError" in out
        assert "PastDateError" in out
        assert "InvalidSlotError" in out
        assert "is now confirmed" in out
        assert len(session.store) == 1

    def test_weekly_scenario(self, capsys):
        session = _session()
        session.run_scenario("weekly")
        out = capsys.readouterr().out
        assert "WeeklyLimitError" in out
        assert "2025-06-18" in out
        assert len(session.store) == 2

    def test_race_scenario(self, capsys):
        session = _session()
        session.run_scenario("race")
        out = capsys.readouterr().out
        assert "SlotTakenError" in out
        assert len(session.store) == 1

    def test_unknown_scenario(self, capsys):
        _session().run_scenario("nope")
        assert "Unknown scenario" in capsys.readouterr().out


class TestCommands:
    def test_book_and_grid(self, capsys):
        session = _session()
        session.handle("book customer-a 2025-06-11 14:30")
        session.handle("grid 2025-06-11")
        out = capsys.readouterr().out
        assert "Booked APT-" in out
        assert "Week of 2025-06-08" in out

    def test_bad_date_is_reported(self, capsys):
        session = _session()
        session.handle("slots tomorrow")
        assert "YYYY-MM-DD" in capsys.readouterr().out

    def test_unknown_command_prints_help(self, capsys):
        _session().handle("dance")
        assert "commands:" in capsys.readouterr().out
