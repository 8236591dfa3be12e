"""Selecting and ordering the shifts shown for one calendar day."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import DisplayResolutionError
from .formatting import format_name, format_span
from .models import Employee, Shift, ViewConfig

logger = logging.getLogger(__name__)

EMPLOYEE_NOT_FOUND = "Employee Not Found"


@dataclass
class DayEntry:
    """A shift to display, paired with its employee when one could be resolved."""
    shift: Shift
    employee: Optional[Employee]
    error: Optional[DisplayResolutionError] = None

    @property
    def resolved(self) -> bool:
        return self.employee is not None


def day_bounds(day, tz=None) -> Tuple[datetime, datetime]:
    """
    Return ``[start, end)`` of the local calendar day containing ``day``.

    ``day`` may be a date or a datetime; only its year/month/day are used,
    read in ``tz`` (or the datetime's own zone, or UTC for a bare date).
    """
    if isinstance(day, datetime):
        local = day.astimezone(tz) if tz is not None else day
        zone = tz if tz is not None else (local.tzinfo or timezone.utc)
        the_date = local.date()
    elif isinstance(day, date):
        zone = tz if tz is not None else timezone.utc
        the_date = day
    else:
        raise TypeError(f"Expected a date or datetime, got {type(day).__name__}")

    following = the_date + timedelta(days=1)
    start = datetime(the_date.year, the_date.month, the_date.day, tzinfo=zone)
    end = datetime(following.year, following.month, following.day, tzinfo=zone)
    return start, end


def filter_shifts(day, shifts: Iterable[Shift], config: ViewConfig, tz=None) -> List[Shift]:
    """Shifts starting on ``day`` for employees visible under ``config``, earliest first.

    Equal start times keep their collection order.
    """
    start, end = day_bounds(day, tz)
    kept = [
        s for s in shifts
        if start <= s.start < end and config.shows_employee(s.employee_id)
    ]
    return sorted(kept, key=lambda s: s.start)


def resolve_employee(shift: Shift, employees_by_id: Dict[int, Employee]) -> Employee:
    employee = employees_by_id.get(shift.employee_id)
    if employee is None:
        raise DisplayResolutionError(shift.id, shift.employee_id)
    return employee


def day_entries(day, shifts: Iterable[Shift], employees: Iterable[Employee],
                config: ViewConfig, tz=None) -> List[DayEntry]:
    """Filter, order and resolve the shifts for one day.

    Shifts whose employee is missing are kept and carry the resolution error.
    """
    employees_by_id = {e.id: e for e in employees}
    entries = []
    for shift in filter_shifts(day, shifts, config, tz):
        try:
            entries.append(DayEntry(shift, resolve_employee(shift, employees_by_id)))
        except DisplayResolutionError as e:
            logger.warning(f"[DAY] {e}")
            entries.append(DayEntry(shift, None, e))
    return entries


def describe_entry(entry: DayEntry, config: ViewConfig, tz=None) -> str:
    if not entry.resolved:
        return EMPLOYEE_NOT_FOUND
    name = format_name(entry.employee, config.last_name_style)
    return f"{name} {format_span(entry.shift, config, tz)}"
