"""
Time provider shared by every status, lock and filter computation.

All "now" reads go through a Clock so tests can pin the instant instead of
depending on the wall clock or the periodic refresh tick.
"""
from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from config.env import env


class Clock:
    """Wall-clock time as naive datetimes in the configured office timezone."""

    def __init__(self, timezone: Optional[str] = None):
        self.timezone = ZoneInfo(timezone) if timezone else None

    def now(self) -> datetime:
        if self.timezone is None:
            return datetime.now()
        return datetime.now(self.timezone).replace(tzinfo=None)

    def today(self) -> str:
        return self.now().strftime("%Y-%m-%d")

    def monotonic_seconds(self) -> float:
        return self.now().timestamp()


class FixedClock(Clock):
    """A clock frozen at a given instant; advance() moves it forward."""

    def __init__(self, instant: datetime):
        super().__init__()
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def advance(self, seconds: float = 0, minutes: float = 0) -> None:
        self._instant = self._instant + timedelta(seconds=seconds, minutes=minutes)


system_clock = Clock(env.timezone)

_current: Clock = system_clock


def get_clock() -> Clock:
    return _current


def set_clock(clock: Optional[Clock]) -> None:
    """Install a clock for the whole app; None restores the system clock."""
    global _current
    _current = clock or system_clock


def now() -> datetime:
    return _current.now()
