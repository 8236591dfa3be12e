"""Data models for the shift calendar: employees, shifts and view configurations."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from enum import Enum

from .errors import InvalidShiftTimes, MalformedTimestamp


class EmployeeLevel(Enum):
    """Employee privilege level, ordered Read < Supervisor < Admin."""
    READ = "Read"
    SUPERVISOR = "Supervisor"
    ADMIN = "Admin"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]

    def at_least(self, other: 'EmployeeLevel') -> bool:
        return self.rank >= other.rank


_LEVEL_RANKS = {
    EmployeeLevel.READ: 0,
    EmployeeLevel.SUPERVISOR: 1,
    EmployeeLevel.ADMIN: 2,
}


class EmployeeColor(Enum):
    """Display color used for an employee's shifts."""
    RED = "Red"
    LIGHT_RED = "LightRed"
    GREEN = "Green"
    LIGHT_GREEN = "LightGreen"
    BLUE = "Blue"
    LIGHT_BLUE = "LightBlue"
    YELLOW = "Yellow"
    LIGHT_YELLOW = "LightYellow"
    GREY = "Grey"
    LIGHT_GREY = "LightGrey"
    BLACK = "Black"
    BROWN = "Brown"
    PURPLE = "Purple"


class HourFormat(Enum):
    H12 = "H12"
    H24 = "H24"


class LastNameStyle(Enum):
    """How much of an employee's last name is shown."""
    FULL = "Full"        # First Last
    INITIAL = "Initial"  # First L.
    HIDDEN = "Hidden"    # First


class ShiftRepeat(Enum):
    """Repeat flag stored on a shift. Occurrences are never expanded."""
    NEVER_REPEAT = "NeverRepeat"
    EVERY_WEEK = "EveryWeek"
    EVERY_DAY = "EveryDay"


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 date-time string into a timezone-aware datetime.

    Naive strings are rejected rather than being pinned to some zone.
    """
    if not isinstance(value, str):
        raise MalformedTimestamp(value, 'expected a string')
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise MalformedTimestamp(value)
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise MalformedTimestamp(value, 'missing time zone offset')
    return parsed


@dataclass
class Employee:
    """An employee. Also the identity behind a login session."""
    id: Optional[int]
    email: str
    first: str
    last: str
    level: EmployeeLevel = EmployeeLevel.READ
    phone_number: Optional[str] = None
    default_color: EmployeeColor = EmployeeColor.BLUE

    # ViewConfig id this employee is currently viewing under
    active_config: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "level": self.level.value,
            "first": self.first,
            "last": self.last,
            "phone_number": self.phone_number,
            "default_color": self.default_color.value,
            "active_config": self.active_config
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Employee':
        return cls(
            id=data.get('id'),
            email=data.get('email', ''),
            first=data.get('first', ''),
            last=data.get('last', ''),
            level=EmployeeLevel(data.get('level', EmployeeLevel.READ.value)),
            phone_number=data.get('phone_number'),
            default_color=EmployeeColor(data.get('default_color', EmployeeColor.BLUE.value)),
            active_config=data.get('active_config')
        )


@dataclass
class ShiftMessage:
    """Wire projection of a Shift, with ISO-8601 string timestamps."""
    id: Optional[int]
    supervisor_id: int
    start: str
    end: str
    employee_id: Optional[int] = None
    repeat: ShiftRepeat = ShiftRepeat.NEVER_REPEAT
    every_x: Optional[int] = None
    note: Optional[str] = None
    on_call: bool = False

    def to_shift(self) -> 'Shift':
        """Convert to a Shift. Raises MalformedTimestamp for bad timestamps."""
        return Shift(
            id=self.id,
            supervisor_id=self.supervisor_id,
            employee_id=self.employee_id,
            start=parse_timestamp(self.start),
            end=parse_timestamp(self.end),
            repeat=self.repeat,
            every_x=self.every_x,
            note=self.note,
            on_call=self.on_call
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "supervisor_id": self.supervisor_id,
            "employee_id": self.employee_id,
            "start": self.start,
            "end": self.end,
            "repeat": self.repeat.value,
            "every_x": self.every_x,
            "note": self.note,
            "on_call": self.on_call
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ShiftMessage':
        return cls(
            id=data.get('id'),
            supervisor_id=data.get('supervisor_id', 0),
            employee_id=data.get('employee_id'),
            start=data.get('start'),
            end=data.get('end'),
            repeat=ShiftRepeat(data.get('repeat', ShiftRepeat.NEVER_REPEAT.value)),
            every_x=data.get('every_x'),
            note=data.get('note'),
            on_call=bool(data.get('on_call', False))
        )


@dataclass
class Shift:
    """A work shift. Unassigned shifts have no employee_id."""
    id: Optional[int]
    supervisor_id: int
    start: datetime
    end: datetime
    employee_id: Optional[int] = None
    repeat: ShiftRepeat = ShiftRepeat.NEVER_REPEAT
    every_x: Optional[int] = None  # repeat stride, only meaningful when repeating
    note: Optional[str] = None
    on_call: bool = False

    def validate(self) -> None:
        """Raise InvalidShiftTimes if the shift ends before it starts."""
        if self.end < self.start:
            raise InvalidShiftTimes(self.id, self.start, self.end)

    def to_message(self) -> ShiftMessage:
        return ShiftMessage(
            id=self.id,
            supervisor_id=self.supervisor_id,
            employee_id=self.employee_id,
            start=self.start.isoformat(),
            end=self.end.isoformat(),
            repeat=self.repeat,
            every_x=self.every_x,
            note=self.note,
            on_call=self.on_call
        )

    @classmethod
    def from_message(cls, message: ShiftMessage) -> 'Shift':
        return message.to_shift()

    def to_dict(self) -> dict:
        return self.to_message().to_dict()

    @classmethod
    def from_dict(cls, data: dict) -> 'Shift':
        return ShiftMessage.from_dict(data).to_shift()


@dataclass
class ViewConfig:
    """A supervisor-defined view: which employees are visible and how they are shown."""
    id: Optional[int]
    employee_id: int
    config_name: str = "Default"
    hour_format: HourFormat = HourFormat.H12
    last_name_style: LastNameStyle = LastNameStyle.INITIAL

    # Visible employee ids; order is kept for display option ordering
    view_employees: List[int] = field(default_factory=list)

    show_minutes: bool = False
    show_shifts: bool = True
    show_vacations: bool = False
    show_call_shifts: bool = False
    show_disabled: bool = False

    def __post_init__(self):
        seen = set()
        unique = []
        for emp_id in self.view_employees:
            if emp_id not in seen:
                seen.add(emp_id)
                unique.append(emp_id)
        self.view_employees = unique

    def shows_employee(self, employee_id: Optional[int]) -> bool:
        return employee_id is not None and employee_id in self.view_employees

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "config_name": self.config_name,
            "hour_format": self.hour_format.value,
            "last_name_style": self.last_name_style.value,
            "view_employees": list(self.view_employees),
            "show_minutes": self.show_minutes,
            "show_shifts": self.show_shifts,
            "show_vacations": self.show_vacations,
            "show_call_shifts": self.show_call_shifts,
            "show_disabled": self.show_disabled
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ViewConfig':
        return cls(
            id=data.get('id'),
            employee_id=data.get('employee_id', 0),
            config_name=data.get('config_name', 'Default'),
            hour_format=HourFormat(data.get('hour_format', HourFormat.H12.value)),
            last_name_style=LastNameStyle(data.get('last_name_style', LastNameStyle.INITIAL.value)),
            view_employees=list(data.get('view_employees', [])),
            show_minutes=data.get('show_minutes', False),
            show_shifts=data.get('show_shifts', True),
            show_vacations=data.get('show_vacations', False),
            show_call_shifts=data.get('show_call_shifts', False),
            show_disabled=data.get('show_disabled', False)
        )
