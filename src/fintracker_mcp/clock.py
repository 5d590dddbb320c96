"""Clock capability supplying the local "today"."""

from datetime import date
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the current local date."""

    def today(self) -> date: ...


class SystemClock:
    """Wall-clock date in the process's local timezone.

    Read on every call: the app may stay open across midnight.
    """

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock frozen at a given date (tests, replays)."""

    def __init__(self, fixed: date):
        self.fixed = fixed

    def today(self) -> date:
        return self.fixed
