"""Shift calendar core - entity model, CRUD stores, day filter, formatting and shift editor."""

from .models import (
    Employee,
    EmployeeColor,
    EmployeeLevel,
    HourFormat,
    LastNameStyle,
    Shift,
    ShiftMessage,
    ShiftRepeat,
    ViewConfig,
    parse_timestamp
)
from .errors import (
    SchedError,
    NotFound,
    DuplicateIdentity,
    MalformedTimestamp,
    DisplayResolutionError,
    InvalidShiftTimes,
    RemoteError
)
from .crud import CrudStore, MemoryStore, next_id
from .view_date import ViewDate
from .day_filter import DayEntry, day_bounds, day_entries, describe_entry, filter_shifts
from .formatting import format_name, format_span, format_time
from .editor import CommitPolicy, EditorSession, ShiftEditor
from .credentials import Credentials, MockCredentials, RemoteCredentials, resolve_active_config
from .calendar_day import CalendarDay
from .tz import resolve_tz

__all__ = [
    # Models
    'Employee',
    'EmployeeColor',
    'EmployeeLevel',
    'HourFormat',
    'LastNameStyle',
    'Shift',
    'ShiftMessage',
    'ShiftRepeat',
    'ViewConfig',
    'parse_timestamp',

    # Errors
    'SchedError',
    'NotFound',
    'DuplicateIdentity',
    'MalformedTimestamp',
    'DisplayResolutionError',
    'InvalidShiftTimes',
    'RemoteError',

    # Stores
    'CrudStore',
    'MemoryStore',
    'next_id',

    # Day view
    'ViewDate',
    'DayEntry',
    'day_bounds',
    'day_entries',
    'describe_entry',
    'filter_shifts',
    'format_name',
    'format_span',
    'format_time',
    'CalendarDay',

    # Editing
    'CommitPolicy',
    'EditorSession',
    'ShiftEditor',

    # Sessions
    'Credentials',
    'MockCredentials',
    'RemoteCredentials',
    'resolve_active_config',

    'resolve_tz'
]
