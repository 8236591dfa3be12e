"""
Uniform create/read/update/delete contract over one entity collection.

Every store holds entities that carry an ``id`` attribute. Stores are the
only owners of their collection: ``get()`` hands out a snapshot list and all
mutation goes through ``add``/``update``/``remove``.
"""

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Optional, TypeVar

from .errors import DuplicateIdentity, NotFound

logger = logging.getLogger(__name__)

T = TypeVar('T')


def next_id(ids: Iterable[Optional[int]]) -> int:
    """Return 1 + max of the given ids, or 0 when there are none."""
    known = [i for i in ids if i is not None]
    return max(known) + 1 if known else 0


class CrudStore(ABC, Generic[T]):
    """Contract shared by the in-memory, SQL and remote stores."""

    entity_name = 'entity'

    @abstractmethod
    def get(self) -> List[T]:
        """Return a snapshot of the whole collection, in store order."""

    @abstractmethod
    def add(self, item: T) -> 'CrudStore[T]':
        """Insert ``item`` at the end of the collection.

        Raises DuplicateIdentity when the caller supplied an id that is taken
        and the store is not the id authority.
        """

    @abstractmethod
    def update(self, item: T) -> 'CrudStore[T]':
        """Replace the element with ``item.id`` wholesale. Raises NotFound."""

    @abstractmethod
    def remove(self, item: T) -> 'CrudStore[T]':
        """Delete the element with ``item.id``. Missing ids are a no-op."""

    def find(self, entity_id) -> Optional[T]:
        for item in self.get():
            if item.id == entity_id:
                return item
        return None

    def last(self) -> Optional[T]:
        """The most recently added element, since ``add`` always appends."""
        items = self.get()
        return items[-1] if items else None


class MemoryStore(CrudStore[T]):
    """
    In-memory store seeded with fixture data.

    ``allocate_ids=True`` makes the store the id authority: every added
    element gets ``1 + max(existing ids)`` regardless of the id it came with.
    Otherwise only elements with ``id=None`` get an allocated id.
    """

    def __init__(self, items: Iterable[T] = (), allocate_ids: bool = False,
                 entity_name: str = 'entity'):
        self._items: List[T] = [copy.deepcopy(i) for i in items]
        self._lock = threading.Lock()
        self.allocate_ids = allocate_ids
        self.entity_name = entity_name

    def get(self) -> List[T]:
        with self._lock:
            return [copy.deepcopy(i) for i in self._items]

    def add(self, item: T) -> 'MemoryStore[T]':
        item = copy.deepcopy(item)
        with self._lock:
            ids = [i.id for i in self._items]
            if self.allocate_ids or item.id is None:
                item.id = next_id(ids)
            elif item.id in ids:
                raise DuplicateIdentity(self.entity_name, item.id)
            # Readers only ever see a complete list
            self._items = self._items + [item]
        logger.debug(f"[STORE] Added {self.entity_name} {item.id}")
        return self

    def update(self, item: T) -> 'MemoryStore[T]':
        item = copy.deepcopy(item)
        with self._lock:
            if not any(i.id == item.id for i in self._items):
                raise NotFound(self.entity_name, item.id)
            self._items = [item if i.id == item.id else i for i in self._items]
        logger.debug(f"[STORE] Replaced {self.entity_name} {item.id}")
        return self

    def remove(self, item: T) -> 'MemoryStore[T]':
        with self._lock:
            remaining = [i for i in self._items if i.id != item.id]
            removed = len(remaining) != len(self._items)
            self._items = remaining
        if removed:
            logger.debug(f"[STORE] Removed {self.entity_name} {item.id}")
        return self
