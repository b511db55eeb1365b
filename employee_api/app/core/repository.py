"""
Generic record store contract and an in-memory implementation.

``Repository`` describes the CRUD surface every store offers: records
are pydantic models carrying an integer ``id`` that the store assigns on
``create``.  Absence is always reported as a value (``None`` or
``False``), never raised.

``InMemoryRepository`` keeps records in a dict guarded by an
``asyncio.Lock``.  It is used for ephemeral runs (``STORAGE_BACKEND=memory``)
and in tests; the durable implementation for employees lives in
``services.employee_repository``.
"""

import asyncio
import logging
from typing import Dict, Generic, List, Optional, Protocol, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


class Repository(Protocol[T]):
    """CRUD contract shared by all record stores."""

    async def create(self, record: T) -> T:
        """Store ``record`` and return a copy carrying its new identity."""
        ...

    async def get_by_id(self, record_id: int) -> Optional[T]:
        ...

    async def get_all(self) -> List[T]:
        """Return a snapshot of all records in insertion order."""
        ...

    async def update(self, record: T) -> bool:
        """Replace the stored record with the same ``id``.

        Dependent records created with the parent (such as benefits) are
        kept as stored.  Returns ``False`` without changing anything when
        no record has that identity.
        """
        ...

    async def delete(self, record_id: int) -> bool:
        ...


class InMemoryRepository(Generic[T]):
    """Dict-backed store for any pydantic model with an ``id`` field.

    Identities are taken from a counter that only moves forward, so an
    identity freed by ``delete`` is never handed out again until
    ``reset`` is called.  Records are copied on the way in and on the
    way out; callers can never mutate stored state directly.

    Parameters
    ----------
    children : Optional[str]
        Name of a list field holding dependent records (for employees,
        ``"benefits"``).  Each child receives its own identity from a
        second counter when the parent is created.
    owner_field : Optional[str]
        Field on each child that is set to the parent's identity.
    """

    def __init__(self, children: Optional[str] = None, owner_field: Optional[str] = None) -> None:
        self._children = children
        self._owner_field = owner_field
        self._records: Dict[int, T] = {}
        self._next_id = 1
        self._next_child_id = 1
        self._lock = asyncio.Lock()

    async def create(self, record: T) -> T:
        async with self._lock:
            record_id = self._next_id
            self._next_id += 1
            changes = {"id": record_id}
            if self._children:
                changes[self._children] = [
                    self._assign_child(child, record_id)
                    for child in getattr(record, self._children)
                ]
            stored = record.model_copy(update=changes, deep=True)
            self._records[record_id] = stored
        logger.info("Created %s %s", type(record).__name__, record_id)
        return stored.model_copy(deep=True)

    async def get_by_id(self, record_id: int) -> Optional[T]:
        record = self._records.get(record_id)
        if record is None:
            return None
        return record.model_copy(deep=True)

    async def get_all(self) -> List[T]:
        snapshot = list(self._records.values())
        return [record.model_copy(deep=True) for record in snapshot]

    async def update(self, record: T) -> bool:
        record_id = getattr(record, "id")
        async with self._lock:
            current = self._records.get(record_id)
            if current is None:
                return False
            changes = {}
            if self._children:
                # Dependent records belong to creation; update leaves them as stored.
                changes[self._children] = getattr(current, self._children)
            self._records[record_id] = record.model_copy(update=changes, deep=True)
        logger.info("Updated %s %s", type(record).__name__, record_id)
        return True

    async def delete(self, record_id: int) -> bool:
        async with self._lock:
            removed = self._records.pop(record_id, None)
        if removed is None:
            return False
        logger.info("Deleted %s %s", type(removed).__name__, record_id)
        return True

    def reset(self) -> None:
        """Drop every record and restart identity assignment at 1."""
        self._records.clear()
        self._next_id = 1
        self._next_child_id = 1

    def _assign_child(self, child: BaseModel, owner_id: int) -> BaseModel:
        changes = {"id": self._next_child_id}
        self._next_child_id += 1
        if self._owner_field:
            changes[self._owner_field] = owner_id
        return child.model_copy(update=changes)
