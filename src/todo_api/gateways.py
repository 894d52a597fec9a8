from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache
from threading import RLock
from typing import List, Optional

from .models import TodoRecord
from .settings import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoGateway(ABC):
    """Persistence contract for todo storage backends."""

    @abstractmethod
    def find_all(self) -> List[TodoRecord]:
        """Return every stored record ordered by id; empty list if none."""

    @abstractmethod
    def find_by_id(self, todo_id: int) -> Optional[TodoRecord]:
        """Return the record with the given id, or None if not found."""

    @abstractmethod
    def exists_by_id(self, todo_id: int) -> bool:
        """Return True if a record with the given id is stored."""

    @abstractmethod
    def save(self, record: TodoRecord) -> TodoRecord:
        """
        Insert or update a record and return the persisted result.
        - id is None: insert, assigning a new id and created_at
        - id is set: overwrite title and done of the stored record; created_at
          is left as stored. An id with no stored record is inserted as-is.
        """

    @abstractmethod
    def delete_by_id(self, todo_id: int) -> None:
        """Delete the record with the given id. Does not report whether it existed."""


class InMemoryTodoGateway(TodoGateway):
    """
    Thread-safe in-memory gateway suitable for testing and ephemeral runs.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TodoRecord] = {}
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def find_all(self) -> List[TodoRecord]:
        with self._lock:
            return [self._items[k].copy() for k in sorted(self._items)]

    def find_by_id(self, todo_id: int) -> Optional[TodoRecord]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def exists_by_id(self, todo_id: int) -> bool:
        with self._lock:
            return todo_id in self._items

    def save(self, record: TodoRecord) -> TodoRecord:
        with self._lock:
            todo_id = record["id"]
            existing = self._items.get(todo_id) if todo_id is not None else None
            if existing is not None:
                stored = existing.copy()
                stored["title"] = record["title"]
                stored["done"] = record["done"]
            else:
                if todo_id is None:
                    todo_id = self._allocate_id()
                else:
                    self._next_id = max(self._next_id, todo_id + 1)
                stored = {
                    "id": todo_id,
                    "title": record["title"],
                    "done": record["done"],
                    "created_at": record["created_at"] or self._now(),
                }
                logger.debug("Inserted todo %s", todo_id)
            self._items[todo_id] = stored
            return stored.copy()

    def delete_by_id(self, todo_id: int) -> None:
        with self._lock:
            self._items.pop(todo_id, None)


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_gateway() -> TodoGateway:
    """
    Return the configured gateway, shared by every request in the process.
    - sqlite: SQLiteTodoGateway at SQLITE_DB_PATH
    - memory: InMemoryTodoGateway
    """
    settings = get_settings()
    if settings.persistence_backend == "memory":
        logger.info("Using in-memory todo storage")
        return InMemoryTodoGateway()

    from .db import SQLiteTodoGateway

    logger.info("Using SQLite todo storage at %s", settings.sqlite_db_path)
    return SQLiteTodoGateway(settings.sqlite_db_path)
