"""Injectable wall clock for past-date rejection and week windows."""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime: ...

    def today(self) -> date: ...


class SystemClock:
    """Wall-clock time in the showroom's timezone."""

    def __init__(self, tz_name: str = "UTC") -> None:
        self.tz_name = tz_name
        self._tz = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """A clock frozen at a given instant. Used by tests and the console demo."""

    def __init__(self, now: datetime) -> None:
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        self._now = now

    @classmethod
    def on(cls, day: date, hour: int = 9) -> "FixedClock":
        return cls(datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc))

    def now(self) -> datetime:
        return self._now

    def today(self) -> date:
        return self._now.date()

    def advance_to(self, now: Optional[datetime] = None, **delta) -> None:
        """Move the frozen instant to ``now`` or forward by a timedelta."""
        if now is not None:
            self._now = now if now.tzinfo else now.replace(tzinfo=timezone.utc)
        else:
            self._now = self._now + timedelta(**delta)
