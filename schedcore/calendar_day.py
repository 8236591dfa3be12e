"""Day view controller tying the stores, the date cursor and the editor together."""

import logging
from typing import List, Optional, Tuple

from .credentials import Credentials, resolve_active_config
from .crud import CrudStore
from .day_filter import DayEntry, day_entries, describe_entry
from .editor import CommitPolicy, ShiftEditor
from .formatting import format_name
from .models import Employee, LastNameStyle, Shift, ViewConfig
from .view_date import ViewDate

logger = logging.getLogger(__name__)

EMPLOYEE_ERROR = "Employee Error!"


class CalendarDay:
    """
    Owns the three entity stores for one calendar screen.

    Consumers read snapshots through ``entries``/``lines`` and change shifts
    only through ``editor``.
    """

    def __init__(self, employees: CrudStore[Employee], shifts: CrudStore[Shift],
                 configs: CrudStore[ViewConfig], credentials: Credentials,
                 view_date: ViewDate, tz=None,
                 policy: CommitPolicy = CommitPolicy.FAIL):
        self.employees = employees
        self.shifts = shifts
        self.configs = configs
        self.credentials = credentials
        self.view_date = view_date
        self.tz = tz
        self.editor = ShiftEditor(shifts, policy)

    def current_employee(self) -> Optional[Employee]:
        return self.credentials.get() or self.credentials.check()

    def active_config(self) -> Optional[ViewConfig]:
        return resolve_active_config(self.current_employee(), self.configs)

    def entries(self) -> List[DayEntry]:
        config = self.active_config()
        if config is None:
            logger.info("[DAY] No active view configuration, nothing to show")
            return []
        return day_entries(self.view_date.get(), self.shifts.get(),
                           self.employees.get(), config, self.tz)

    def lines(self) -> List[str]:
        config = self.active_config()
        if config is None:
            return []
        return [describe_entry(e, config, self.tz) for e in self.entries()]

    def previous_day(self):
        return self.view_date.add_days(-1)

    def next_day(self):
        return self.view_date.add_days(1)

    def visible_employees(self) -> List[Optional[Employee]]:
        """Employees of the active view, in ``view_employees`` order. Unknown ids give None."""
        config = self.active_config()
        if config is None:
            return []
        by_id = {e.id: e for e in self.employees.get()}
        return [by_id.get(emp_id) for emp_id in config.view_employees]

    def employee_options(self) -> List[str]:
        return [
            format_name(e, LastNameStyle.FULL) if e is not None else EMPLOYEE_ERROR
            for e in self.visible_employees()
        ]

    def select(self, shift_id: int) -> Tuple[bool, str]:
        """Open the editor on the stored shift with this id."""
        shift = self.shifts.find(shift_id)
        if shift is None:
            return False, f"Shift {shift_id} not found"
        return self.editor.open_editor(shift)
