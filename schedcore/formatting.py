"""Display strings for employee names and shift times.

These never raise: an unrecognized style or format renders a literal
fallback string so one bad value cannot break a whole calendar view.
"""

from datetime import datetime

from .models import Employee, HourFormat, LastNameStyle, Shift, ViewConfig

UNKNOWN_NAME_STYLE = "Unknown last name style!"
UNKNOWN_HOUR_FORMAT = "Unknown hour format!"


def _coerce(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def format_name(employee: Employee, style) -> str:
    """Format an employee's name: Full "First Last", Initial "First L.", Hidden "First"."""
    style = _coerce(LastNameStyle, style)
    if style == LastNameStyle.FULL:
        return f"{employee.first} {employee.last}"
    if style == LastNameStyle.INITIAL:
        return f"{employee.first} {employee.last[:1]}."
    if style == LastNameStyle.HIDDEN:
        return employee.first
    return UNKNOWN_NAME_STYLE


def format_time(instant: datetime, hour_format, show_minutes: bool, tz=None) -> str:
    """
    Format a timestamp as an hour, e.g. "2p", "2:30p", "14", "14:30".

    12-hour output carries an "a"/"p" suffix; 24-hour output has none.
    The hour is read in ``tz`` when given, otherwise in the instant's own zone.
    """
    hour_format = _coerce(HourFormat, hour_format)
    if hour_format is None:
        return UNKNOWN_HOUR_FORMAT

    local = instant.astimezone(tz) if tz is not None else instant
    minutes = f":{local.minute:02d}" if show_minutes else ""

    if hour_format == HourFormat.H12:
        hour = local.hour % 12 or 12
        suffix = "p" if local.hour >= 12 else "a"
        return f"{hour}{minutes}{suffix}"
    return f"{local.hour}{minutes}"


def format_span(shift: Shift, config: ViewConfig, tz=None) -> str:
    """Format a shift's start and end under a view configuration."""
    start = format_time(shift.start, config.hour_format, config.show_minutes, tz)
    end = format_time(shift.end, config.hour_format, config.show_minutes, tz)
    return f"{start} - {end}"
