"""Session holders that resolve the employee using the calendar."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .crud import CrudStore
from .models import Employee, ViewConfig
from .remote import Transport, raise_for_status

logger = logging.getLogger(__name__)


class Credentials(ABC):
    """Current-session lookup. ``None`` always means "no session"."""

    @abstractmethod
    def get(self) -> Optional[Employee]:
        """The employee resolved by the last check or login, without I/O."""

    @abstractmethod
    def check(self) -> Optional[Employee]:
        """Resolve the current session."""

    @abstractmethod
    def login(self, email: str, password: str) -> Optional[Employee]:
        pass

    @abstractmethod
    def logout(self) -> None:
        pass


class MockCredentials(Credentials):
    """Always signs in as the given fixture employee."""

    def __init__(self, me: Employee):
        self.me = me
        self._current: Optional[Employee] = None

    def get(self) -> Optional[Employee]:
        return self._current

    def check(self) -> Optional[Employee]:
        self._current = self.me
        return self._current

    def login(self, email: str, password: str) -> Optional[Employee]:
        return self.check()

    def logout(self) -> None:
        self._current = None


class RemoteCredentials(Credentials):
    """Session held by the scheduling service (cookie kept by the transport)."""

    def __init__(self, transport: Transport):
        self.transport = transport
        self._current: Optional[Employee] = None

    def get(self) -> Optional[Employee]:
        return self._current

    def check(self) -> Optional[Employee]:
        status, body = self.transport('/sched/check_login', None)
        if status == 401:
            self._current = None
            return None
        # Any other failure is an outage, not a logout
        raise_for_status(status, body, 'session')
        employee = body.get('employee')
        self._current = Employee.from_dict(employee) if employee else None
        return self._current

    def login(self, email: str, password: str) -> Optional[Employee]:
        status, body = self.transport('/sched/login_request', {'email': email, 'password': password})
        if status == 401:
            logger.info(f"[AUTH] Login rejected for {email}")
            self._current = None
            return None
        raise_for_status(status, body, 'session')
        self._current = Employee.from_dict(body['employee'])
        return self._current

    def logout(self) -> None:
        status, body = self.transport('/sched/logout_request', None)
        self._current = None
        if status != 401:
            raise_for_status(status, body, 'session')


def resolve_active_config(employee: Optional[Employee], configs: CrudStore[ViewConfig]) -> Optional[ViewConfig]:
    """The ViewConfig the employee is currently viewing under, if any."""
    if employee is None or employee.active_config is None:
        return None
    return configs.find(employee.active_config)
