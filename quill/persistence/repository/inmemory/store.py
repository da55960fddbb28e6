"""Shared in-memory tables with transactional undo.

All in-memory repositories of one container scope share an
``InMemoryStore`` so that a ``transaction()`` spanning several repositories
is atomic, like a database transaction would be.

Every write made inside a transaction records how to undo itself in the
current task's journal. Undo entries touch only what the write touched:

- inserts are undone by deleting the row
- deletes are undone by putting the old row back
- field updates restore the old field values
- counter deltas apply the inverse delta

so rolling back one task never erases another task's committed changes.
The journal lives in a ``ContextVar``, giving each asyncio task its own.
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any, Hashable, Optional
from uuid import UUID

import logfire

from quill.domain.repository import UnitOfWork

UndoAction = Callable[[], None]


class _Frame:
    """Undo log of one (possibly nested) transaction block."""

    def __init__(self, parent: Optional["_Frame"]) -> None:
        self.parent = parent
        self.undo: list[UndoAction] = []
        # Only filled on the outermost frame
        self.locks: dict[Hashable, asyncio.Lock] = {}

    @property
    def root(self) -> "_Frame":
        frame = self
        while frame.parent is not None:
            frame = frame.parent
        return frame


class InMemoryStore:
    """Rows of every entity, keyed by ID, plus the undo machinery."""

    TABLES = ("users", "posts", "comments", "likes")

    def __init__(self) -> None:
        self.tables: dict[str, dict[UUID, Any]] = {name: {} for name in self.TABLES}
        self._frame: ContextVar[Optional[_Frame]] = ContextVar(
            f"inmemory_store_frame_{id(self)}", default=None
        )
        self._locks: dict[Hashable, asyncio.Lock] = {}

    # ------------------------------------------------------------------
    # Row operations (journaled)
    # ------------------------------------------------------------------

    def get(self, table: str, key: UUID) -> Any:
        return self.tables[table].get(key)

    def rows(self, table: str) -> list[Any]:
        return list(self.tables[table].values())

    def insert(self, table: str, key: UUID, row: Any) -> None:
        rows = self.tables[table]
        rows[key] = row
        self._record(lambda: rows.pop(key, None))

    def delete(self, table: str, key: UUID) -> Any:
        rows = self.tables[table]
        old = rows.pop(key, None)
        if old is not None:
            self._record(lambda: rows.setdefault(key, old))
        return old

    def update(self, table: str, key: UUID, values: dict[str, Any]) -> Any:
        """Replace fields of a row; returns the new row or None."""
        rows = self.tables[table]
        current = rows.get(key)
        if current is None:
            return None

        old_values = {name: getattr(current, name) for name in values}
        rows[key] = current.model_copy(update=values)

        def undo() -> None:
            row = rows.get(key)
            if row is not None:
                rows[key] = row.model_copy(update=old_values)

        self._record(undo)
        return rows[key]

    def add(self, table: str, key: UUID, field: str, delta: int) -> Optional[int]:
        """Apply a counter delta; None if the row is missing or would go negative."""
        rows = self.tables[table]
        current = rows.get(key)
        if current is None:
            return None
        value = getattr(current, field) + delta
        if value < 0:
            return None
        rows[key] = current.model_copy(update={field: value})

        def undo() -> None:
            row = rows.get(key)
            if row is not None:
                rows[key] = row.model_copy(
                    update={field: max(getattr(row, field) - delta, 0)}
                )

        self._record(undo)
        return value

    def _record(self, action: UndoAction) -> None:
        frame = self._frame.get()
        if frame is not None:
            frame.undo.append(action)

    # ------------------------------------------------------------------
    # Transactions and locks
    # ------------------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._frame.get() is not None

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        parent = self._frame.get()
        frame = _Frame(parent)
        token = self._frame.set(frame)
        try:
            yield
        except BaseException:
            # Cancellation included: every write of this block is undone
            for action in reversed(frame.undo):
                action()
            logfire.debug("In-memory transaction rolled back", writes=len(frame.undo))
            raise
        else:
            if parent is not None:
                parent.undo.extend(frame.undo)
        finally:
            self._frame.reset(token)
            if parent is None:
                for lock in frame.locks.values():
                    lock.release()

    async def lock(self, key: Hashable) -> None:
        """Hold ``key`` until the outermost open transaction ends."""
        frame = self._frame.get()
        if frame is None:
            raise RuntimeError("Locks can only be taken inside a transaction")
        root = frame.root
        if key in root.locks:
            return
        lock = self._locks.setdefault(key, asyncio.Lock())
        await lock.acquire()
        root.locks[key] = lock


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work over an ``InMemoryStore``."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def transaction(self):
        return self.store.transaction()
