"""
Time source shared by the services.

All "today" and "current hour" decisions go through a Clock so that date
window math can be pinned in tests with FixedClock.
"""

from datetime import date, datetime, timedelta

import pytz


class Clock:
    """Wall clock in the market time zone."""

    def __init__(self, timezone_name: str = "Europe/Madrid"):
        self.timezone_name = timezone_name
        self.timezone = pytz.timezone(timezone_name)

    def now(self) -> datetime:
        """Current time, timezone aware, in the market time zone."""
        return datetime.now(pytz.utc).astimezone(self.timezone)

    def today(self) -> date:
        return self.now().date()

    def current_hour(self) -> int:
        return self.now().hour


class FixedClock(Clock):
    """Clock frozen at a given moment. Naive moments are read as local time."""

    def __init__(self, moment: datetime, timezone_name: str = "Europe/Madrid"):
        super().__init__(timezone_name)
        if moment.tzinfo is None:
            moment = self.timezone.localize(moment)
        self.moment = moment

    def now(self) -> datetime:
        return self.moment.astimezone(self.timezone)

    def advance(self, **kwargs) -> None:
        """Move the clock forward, e.g. advance(hours=2)."""
        self.moment = self.moment + timedelta(**kwargs)
