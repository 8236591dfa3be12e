"""
Remote-backed stores.

Talks to the scheduling service's JSON endpoints (``/sched/get_shifts``,
``/sched/add_shift``, ...). The store keeps a local snapshot and replaces it
in one step after each acknowledged mutation, so ``get()`` never shows a
half-applied change.
"""

import copy
import json
import logging
import threading
from http.cookiejar import CookieJar
from typing import Callable, List, Optional, Tuple
from urllib.request import HTTPCookieProcessor, Request, build_opener
from urllib.error import URLError, HTTPError

from .crud import CrudStore, T
from .errors import DuplicateIdentity, MalformedTimestamp, NotFound, RemoteError
from .models import Employee, Shift, ViewConfig

logger = logging.getLogger(__name__)

# (path, payload) -> (HTTP status, decoded JSON body)
Transport = Callable[[str, Optional[dict]], Tuple[int, dict]]


class UrllibTransport:
    """POSTs JSON to the service and decodes the JSON reply. Keeps the session cookie."""

    def __init__(self, base_url: str, timeout: float = 15):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.opener = build_opener(HTTPCookieProcessor(CookieJar()))

    def __call__(self, path: str, payload: Optional[dict] = None) -> Tuple[int, dict]:
        req = Request(
            self.base_url + path,
            data=json.dumps(payload or {}).encode('utf-8'),
            headers={"Content-Type": "application/json"},
            method="POST"
        )
        try:
            with self.opener.open(req, timeout=self.timeout) as response:
                return response.status, json.loads(response.read().decode('utf-8') or '{}')
        except HTTPError as e:
            raw = e.read().decode('utf-8') if e.fp else ''
            try:
                body = json.loads(raw) if raw else {}
            except json.JSONDecodeError:
                body = {'message': raw or str(e)}
            return e.code, body
        except URLError as e:
            raise RemoteError(f"Network error calling {path}: {e.reason}")


def raise_for_status(status: int, body: dict, entity: str = 'entity', entity_id=None):
    """Translate an error reply into the matching scheduling error."""
    if 200 <= status < 300:
        return
    message = body.get('message', f'HTTP {status}')
    if status == 404:
        raise NotFound(entity, entity_id)
    if status == 409:
        raise DuplicateIdentity(body.get('entity', entity), body.get('entity_id', entity_id))
    if status == 400 and body.get('error') == MalformedTimestamp.kind:
        # The service names the offending value and why it was rejected
        raise MalformedTimestamp(body.get('value'), body.get('reason', message))
    raise RemoteError(message, status)


class RemoteStore(CrudStore[T]):
    """CRUD store whose collection lives on the scheduling service."""

    def __init__(self, transport: Transport, singular: str, plural: str,
                 decode: Callable[[dict], T]):
        self.transport = transport
        self.singular = singular
        self.plural = plural
        self.entity_name = singular
        self.decode = decode
        self._items: Optional[List[T]] = None
        self._lock = threading.Lock()
        # Mutations are applied one at a time, in call order
        self._mutation_lock = threading.Lock()

    def refresh(self) -> 'RemoteStore[T]':
        status, body = self.transport(f'/sched/get_{self.plural}', None)
        raise_for_status(status, body, self.singular)
        items = [self.decode(d) for d in body.get(self.plural, [])]
        with self._lock:
            self._items = items
        return self

    def get(self) -> List[T]:
        if self._items is None:
            self.refresh()
        with self._lock:
            return [copy.deepcopy(i) for i in self._items]

    def _mutate(self, action: str, item: T) -> 'RemoteStore[T]':
        payload = item.to_dict()
        with self._mutation_lock:
            status, body = self.transport(f'/sched/{action}_{self.singular}', payload)
            if status >= 300:
                logger.info(f"[REMOTE] {action} {self.singular} {item.id} failed with HTTP {status}")
            raise_for_status(status, body, self.singular, item.id)
            self.refresh()
        return self

    def add(self, item: T) -> 'RemoteStore[T]':
        return self._mutate('add', item)

    def update(self, item: T) -> 'RemoteStore[T]':
        return self._mutate('replace', item)

    def remove(self, item: T) -> 'RemoteStore[T]':
        return self._mutate('remove', item)


def remote_employees(transport: Transport) -> RemoteStore[Employee]:
    return RemoteStore(transport, 'employee', 'employees', Employee.from_dict)


def remote_shifts(transport: Transport) -> RemoteStore[Shift]:
    return RemoteStore(transport, 'shift', 'shifts', Shift.from_dict)


def remote_configs(transport: Transport) -> RemoteStore[ViewConfig]:
    return RemoteStore(transport, 'config', 'configs', ViewConfig.from_dict)
