"""
Fixture data for development and tests.

Two employees, one shift each on 2019-06-27, and one view per employee
showing both of them with minutes.
"""

from datetime import datetime, timedelta, timezone

from .crud import MemoryStore
from .models import (
    Employee, EmployeeColor, EmployeeLevel, Shift, ShiftRepeat, ViewConfig
)

# Pacific daylight time, the zone the fixture shifts were entered in
FIXTURE_TZ = timezone(timedelta(hours=-7))
FIXTURE_DAY = datetime(2019, 6, 27, tzinfo=FIXTURE_TZ)


def get_sample_employees():
    return [
        Employee(
            id=0,
            email="jeffw387@gmail.com",
            level=EmployeeLevel.ADMIN,
            first="Jeff",
            last="Wright",
            default_color=EmployeeColor.LIGHT_BLUE,
            active_config=0
        ),
        Employee(
            id=1,
            email="Timothy.Baker@providence.org",
            level=EmployeeLevel.SUPERVISOR,
            first="Tim",
            last="Baker",
            default_color=EmployeeColor.RED,
            active_config=1
        ),
    ]


def get_sample_shifts():
    return [
        Shift(
            id=0,
            supervisor_id=1,
            employee_id=0,
            start=datetime(2019, 6, 27, 8, 30, tzinfo=FIXTURE_TZ),
            end=datetime(2019, 6, 27, 19, 0, tzinfo=FIXTURE_TZ),
            repeat=ShiftRepeat.NEVER_REPEAT,
            on_call=False
        ),
        Shift(
            id=1,
            supervisor_id=1,
            employee_id=1,
            start=datetime(2019, 6, 27, 7, 0, tzinfo=FIXTURE_TZ),
            end=datetime(2019, 6, 27, 17, 0, tzinfo=FIXTURE_TZ),
            repeat=ShiftRepeat.NEVER_REPEAT,
            on_call=False
        ),
    ]


def get_sample_configs():
    return [
        ViewConfig(id=0, employee_id=0, view_employees=[0, 1], show_minutes=True),
        ViewConfig(id=1, employee_id=1, view_employees=[0, 1], show_minutes=True),
    ]


def get_mock_stores():
    """Fresh in-memory (employees, shifts, configs) stores seeded with the fixtures."""
    return (
        MemoryStore(get_sample_employees(), entity_name='employee'),
        MemoryStore(get_sample_shifts(), allocate_ids=True, entity_name='shift'),
        MemoryStore(get_sample_configs(), entity_name='config'),
    )
