"""
Fixed-delay debounce for the event form's conflict pre-check.

Streamlit reruns the script on every widget change, so the debouncer keeps
the last-seen input and the time it changed; `due()` turns true once the
input has been stable for the delay.
"""
from typing import Any, Hashable, Optional

from app_lib.scheduling.clock import Clock, get_clock
from config.settings import config


class Debouncer:
    def __init__(self, delay_seconds: Optional[float] = None, clock: Optional[Clock] = None):
        self.delay_seconds = config.conflict_check_delay if delay_seconds is None else delay_seconds
        self.clock = clock
        self.key: Optional[Hashable] = None
        self.changed_at: Optional[float] = None
        self.fired_key: Optional[Hashable] = None
        self.result: Any = None

    def _seconds(self) -> float:
        return (self.clock or get_clock()).monotonic_seconds()

    def touch(self, key: Hashable) -> None:
        """Record the current input; restarts the delay when it changed."""
        if key != self.key:
            self.key = key
            self.changed_at = self._seconds()

    def remaining(self) -> float:
        if self.changed_at is None:
            return 0.0
        return max(0.0, self.delay_seconds - (self._seconds() - self.changed_at))

    def due(self) -> bool:
        """True when the input is settled and has not been handled yet."""
        if self.key is None or self.key == self.fired_key:
            return False
        return self.remaining() <= 0

    def fire(self, result: Any = None) -> None:
        self.fired_key = self.key
        self.result = result

    def reset(self) -> None:
        self.key = None
        self.changed_at = None
        self.fired_key = None
        self.result = None
