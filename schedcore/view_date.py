"""The day currently shown on the calendar."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class ViewDate:
    """Holds the displayed day. Only the calendar date matters, not the time of day."""

    def __init__(self, clock: Callable[[], datetime] = system_clock, tz=None,
                 start: Optional[datetime] = None):
        value = start if start is not None else clock()
        self._view_date = value.astimezone(tz) if tz is not None else value

    def get(self) -> datetime:
        return self._view_date

    def add_days(self, days: int) -> datetime:
        """Move the cursor by whole calendar days, keeping the wall-clock time."""
        self._view_date = self._view_date + timedelta(days=days)
        return self._view_date
