"""
Shift editor state machine.

The editor is either closed or open on a private copy of one shift. Edits
reach the shift store only through ``commit`` and ``remove_active``; every
operation reports ``(success, message)`` and a failed operation leaves the
editor exactly as it was.
"""

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .crud import CrudStore
from .errors import InvalidShiftTimes, NotFound, SchedError
from .models import Shift

logger = logging.getLogger(__name__)


class CommitPolicy(Enum):
    """What ``commit`` does when the shift being edited is no longer in the store."""
    FAIL = "fail"  # report the missing shift and stay open
    ADD = "add"    # insert the edited shift as a new one


@dataclass
class EditorSession:
    is_open: bool = False
    active_shift: Optional[Shift] = None


class ShiftEditor:
    """Open/close/commit/remove lifecycle for editing one shift at a time."""

    def __init__(self, shifts: CrudStore[Shift], policy: CommitPolicy = CommitPolicy.FAIL):
        self.shifts = shifts
        self.policy = policy
        self._session = EditorSession()

    @property
    def is_open(self) -> bool:
        return self._session.is_open

    @property
    def active_shift(self) -> Optional[Shift]:
        return copy.deepcopy(self._session.active_shift)

    @property
    def session(self) -> EditorSession:
        return EditorSession(self._session.is_open, self.active_shift)

    def open_editor(self, shift: Shift) -> Tuple[bool, str]:
        """Start editing a copy of ``shift``. Any unsaved edit of another shift is dropped."""
        self._session = EditorSession(True, copy.deepcopy(shift))
        return True, f"Editing shift {shift.id}"

    def close_editor(self) -> Tuple[bool, str]:
        self._session = EditorSession()
        return True, "Editor closed"

    def commit(self, updated: Shift) -> Tuple[bool, str]:
        """Write ``updated`` back to the store and stay open on it.

        Only accepted while open on the same shift id, so a commit that
        arrives after the editor moved on cannot bring old state back.
        """
        if not self._session.is_open:
            logger.info(f"[EDITOR] Ignored commit for shift {updated.id}: editor is closed")
            return False, "Editor is not open"
        if updated.id != self._session.active_shift.id:
            logger.info(f"[EDITOR] Ignored commit for shift {updated.id}: editing {self._session.active_shift.id}")
            return False, f"Editor is open on shift {self._session.active_shift.id}, not {updated.id}"

        try:
            updated.validate()
        except InvalidShiftTimes as e:
            return False, str(e)

        try:
            self.shifts.update(updated)
            committed = updated
        except NotFound as e:
            if self.policy != CommitPolicy.ADD:
                logger.warning(f"[EDITOR] Commit failed: {e}")
                return False, str(e)
            try:
                committed = self.shifts.add(updated).last()
            except SchedError as add_error:
                logger.warning(f"[EDITOR] Commit failed: {add_error}")
                return False, str(add_error)
            logger.info(f"[EDITOR] Shift {updated.id} was missing, added as {committed.id}")
        except SchedError as e:
            logger.warning(f"[EDITOR] Commit failed: {e}")
            return False, str(e)

        self._session = EditorSession(True, copy.deepcopy(committed))
        return True, f"Shift {committed.id} saved"

    def remove_active(self) -> Tuple[bool, str]:
        if not self._session.is_open:
            return False, "Editor is not open"
        shift = self._session.active_shift
        try:
            self.shifts.remove(shift)
        except SchedError as e:
            logger.warning(f"[EDITOR] Remove failed: {e}")
            return False, str(e)
        self._session = EditorSession()
        return True, f"Shift {shift.id} removed"
