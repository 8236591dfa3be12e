"""
Database service for persisting calendar data.

Handles conversion between the core dataclass models and the SQLAlchemy
database models, and provides ``SqlStore``, the CRUD store the HTTP API is
built on.
"""

import logging
import threading
from typing import Callable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from models import db, DBEmployee, DBShift, DBViewConfig
from schedcore.crud import CrudStore, next_id
from schedcore.errors import DuplicateIdentity, NotFound
from schedcore.models import (
    Employee, EmployeeColor, EmployeeLevel, HourFormat, LastNameStyle,
    Shift, ShiftMessage, ShiftRepeat, ViewConfig
)
from schedcore.sample_data import (
    get_sample_configs, get_sample_employees, get_sample_shifts
)

logger = logging.getLogger(__name__)


# =============================================================================
# EMPLOYEE CONVERSION
# =============================================================================

def _db_employee_to_model(db_emp: DBEmployee) -> Employee:
    """Convert a DBEmployee to an Employee dataclass."""
    try:
        level = EmployeeLevel(db_emp.level)
    except ValueError:
        level = EmployeeLevel.READ

    try:
        color = EmployeeColor(db_emp.default_color)
    except ValueError:
        color = EmployeeColor.BLUE

    return Employee(
        id=db_emp.id,
        email=db_emp.email,
        first=db_emp.first,
        last=db_emp.last,
        level=level,
        phone_number=db_emp.phone_number,
        default_color=color,
        active_config=db_emp.active_config
    )


def _apply_employee(db_emp: DBEmployee, emp: Employee):
    """Copy every field of an Employee onto its row. The password is left alone."""
    db_emp.email = emp.email
    db_emp.first = emp.first
    db_emp.last = emp.last
    db_emp.level = emp.level.value
    db_emp.phone_number = emp.phone_number
    db_emp.default_color = emp.default_color.value
    db_emp.active_config = emp.active_config


# =============================================================================
# SHIFT CONVERSION
# =============================================================================

def _db_shift_to_model(db_shift: DBShift) -> Shift:
    """Convert a DBShift to a Shift dataclass via its wire form."""
    try:
        repeat = ShiftRepeat(db_shift.repeat)
    except ValueError:
        repeat = ShiftRepeat.NEVER_REPEAT

    message = ShiftMessage(
        id=db_shift.id,
        supervisor_id=db_shift.supervisor_id,
        employee_id=db_shift.employee_id,
        start=db_shift.start_iso,
        end=db_shift.end_iso,
        repeat=repeat,
        every_x=db_shift.every_x,
        note=db_shift.note,
        on_call=bool(db_shift.on_call)
    )
    return message.to_shift()


def _apply_shift(db_shift: DBShift, shift: Shift):
    message = shift.to_message()
    db_shift.supervisor_id = message.supervisor_id
    db_shift.employee_id = message.employee_id
    db_shift.start_iso = message.start
    db_shift.end_iso = message.end
    db_shift.repeat = message.repeat.value
    db_shift.every_x = message.every_x
    db_shift.note = message.note
    db_shift.on_call = message.on_call


# =============================================================================
# VIEW CONFIG CONVERSION
# =============================================================================

def _db_config_to_model(db_config: DBViewConfig) -> ViewConfig:
    """Convert a DBViewConfig to a ViewConfig dataclass."""
    try:
        hour_format = HourFormat(db_config.hour_format)
    except ValueError:
        hour_format = HourFormat.H12

    try:
        last_name_style = LastNameStyle(db_config.last_name_style)
    except ValueError:
        last_name_style = LastNameStyle.INITIAL

    return ViewConfig(
        id=db_config.id,
        employee_id=db_config.employee_id,
        config_name=db_config.config_name,
        hour_format=hour_format,
        last_name_style=last_name_style,
        view_employees=db_config.get_view_employees_list(),
        show_minutes=bool(db_config.show_minutes),
        show_shifts=bool(db_config.show_shifts),
        show_vacations=bool(db_config.show_vacations),
        show_call_shifts=bool(db_config.show_call_shifts),
        show_disabled=bool(db_config.show_disabled)
    )


def _apply_config(db_config: DBViewConfig, config: ViewConfig):
    db_config.employee_id = config.employee_id
    db_config.config_name = config.config_name
    db_config.hour_format = config.hour_format.value
    db_config.last_name_style = config.last_name_style.value
    db_config.set_view_employees_list(config.view_employees)
    db_config.show_minutes = config.show_minutes
    db_config.show_shifts = config.show_shifts
    db_config.show_vacations = config.show_vacations
    db_config.show_call_shifts = config.show_call_shifts
    db_config.show_disabled = config.show_disabled


# =============================================================================
# SQL-BACKED STORE
# =============================================================================

class SqlStore(CrudStore):
    """
    CRUD store over one table. Rows come back ordered by id.

    Must be used inside a Flask application context.
    """

    def __init__(self, model, to_model: Callable, apply: Callable,
                 entity_name: str, allocate_ids: bool = False,
                 unique_field: Optional[str] = None):
        self.model = model
        self.to_model = to_model
        self.apply = apply
        self.entity_name = entity_name
        self.allocate_ids = allocate_ids
        self.unique_field = unique_field  # column besides id with a unique constraint
        self._lock = threading.Lock()
        self._local = threading.local()  # id of the last row this thread added

    def get(self) -> List:
        return [self.to_model(r) for r in self.model.query.order_by(self.model.id).all()]

    def find(self, entity_id) -> Optional[object]:
        row = db.session.get(self.model, entity_id)
        return self.to_model(row) if row is not None else None

    def add(self, item) -> 'SqlStore':
        with self._lock:
            if self.allocate_ids or item.id is None:
                max_id = db.session.query(func.max(self.model.id)).scalar()
                new_id = next_id([max_id])
            elif db.session.get(self.model, item.id) is not None:
                raise DuplicateIdentity(self.entity_name, item.id)
            else:
                new_id = item.id

            row = self.model(id=new_id)
            self.apply(row, item)
            db.session.add(row)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                raise self._conflict(item, new_id)
            self._local.last_added_id = new_id
        logger.debug(f"[DB] Added {self.entity_name} {new_id}")
        return self

    def last(self):
        """The row most recently added by this thread, which is not always the highest id."""
        last_id = getattr(self._local, 'last_added_id', None)
        if last_id is None:
            return super().last()
        return self.find(last_id)

    def _conflict(self, item, entity_id) -> DuplicateIdentity:
        """A unique constraint failed; the id was already checked, so blame the unique column."""
        if self.unique_field:
            value = getattr(item, self.unique_field)
            logger.info(f"[DB] {self.entity_name} {entity_id}: {self.unique_field} {value!r} is taken")
            return DuplicateIdentity(f'{self.entity_name} {self.unique_field}', value)
        return DuplicateIdentity(self.entity_name, entity_id)

    def update(self, item) -> 'SqlStore':
        row = db.session.get(self.model, item.id)
        if row is None:
            raise NotFound(self.entity_name, item.id)
        self.apply(row, item)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise self._conflict(item, item.id)
        logger.debug(f"[DB] Replaced {self.entity_name} {item.id}")
        return self

    def remove(self, item) -> 'SqlStore':
        row = db.session.get(self.model, item.id)
        if row is not None:
            db.session.delete(row)
            db.session.commit()
            logger.debug(f"[DB] Removed {self.entity_name} {item.id}")
        return self


def employee_store() -> SqlStore:
    return SqlStore(DBEmployee, _db_employee_to_model, _apply_employee, 'employee',
                    unique_field='email')


def shift_store() -> SqlStore:
    # Shift ids are always allocated here: 1 + max, or 0 for an empty table
    return SqlStore(DBShift, _db_shift_to_model, _apply_shift, 'shift', allocate_ids=True)


def config_store() -> SqlStore:
    return SqlStore(DBViewConfig, _db_config_to_model, _apply_config, 'config')


# =============================================================================
# ACCOUNTS
# =============================================================================

def get_db_employee_by_email(email: str) -> Optional[DBEmployee]:
    """Find an employee's login row by email (case-insensitive)."""
    return DBEmployee.query.filter(func.lower(DBEmployee.email) == email.lower()).first()


def set_employee_password(employee_id: int, password: str) -> bool:
    """Set the login password for an employee."""
    db_emp = db.session.get(DBEmployee, employee_id)
    if db_emp is None:
        return False
    db_emp.set_password(password)
    db.session.commit()
    return True


def load_employee(db_emp: DBEmployee) -> Employee:
    return _db_employee_to_model(db_emp)


# =============================================================================
# FIXTURES
# =============================================================================

def seed_fixtures(password: Optional[str] = None):
    """Seed the fixture employees, shifts and configs into an empty database."""
    if DBEmployee.query.count() > 0:
        return

    employees, shifts, configs = employee_store(), shift_store(), config_store()
    for emp in get_sample_employees():
        employees.add(emp)
        if password:
            set_employee_password(emp.id, password)
    for shift in get_sample_shifts():
        shifts.add(shift)
    for config in get_sample_configs():
        configs.add(config)

    logger.info(f"[DB] Seeded {len(get_sample_employees())} employees, "
                f"{len(get_sample_shifts())} shifts, {len(get_sample_configs())} configs")
