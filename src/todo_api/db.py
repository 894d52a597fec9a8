from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generator, List, Optional

from .gateways import TodoGateway
from .models import TodoRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    done: str = "done"
    created_at: str = "created_at"


_COLS = _Cols()

# SQLite INTEGER is a signed 64-bit value
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _storable_id(todo_id: int) -> bool:
    return _MIN_ID <= todo_id <= _MAX_ID


class SQLiteTodoGateway(TodoGateway):
    """
    SQLite-backed gateway over a single `todos` table.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error:
            logger.exception("SQLite operation failed on %s", self._db_path)
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            # AUTOINCREMENT keeps ids of deleted rows from being handed out again
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT NOT NULL,
                    {_COLS.done} INTEGER NOT NULL DEFAULT 0,
                    {_COLS.created_at} TEXT NOT NULL
                )
                """
            )

    def _row_to_record(self, row: sqlite3.Row) -> TodoRecord:
        return {
            "id": int(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "done": bool(row[_COLS.done]),
            "created_at": datetime.fromisoformat(row[_COLS.created_at]),
        }

    def _select(self, conn: sqlite3.Connection, todo_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)
        ).fetchone()

    def find_all(self) -> List[TodoRecord]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.id} ASC"
            ).fetchall()
            return [self._row_to_record(r) for r in rows]

    def find_by_id(self, todo_id: int) -> Optional[TodoRecord]:
        if not _storable_id(todo_id):
            return None
        with self._conn() as conn:
            row = self._select(conn, todo_id)
            return self._row_to_record(row) if row else None

    def exists_by_id(self, todo_id: int) -> bool:
        if not _storable_id(todo_id):
            return False
        with self._conn() as conn:
            row = conn.execute(
                f"SELECT 1 FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)
            ).fetchone()
            return row is not None

    def save(self, record: TodoRecord) -> TodoRecord:
        done = 1 if record["done"] else 0
        with self._conn() as conn:
            todo_id = record["id"]
            updated = 0
            if todo_id is not None:
                # created_at stays as first inserted
                cur = conn.execute(
                    f"UPDATE {_COLS.table} SET {_COLS.title} = ?, {_COLS.done} = ? WHERE {_COLS.id} = ?",
                    (record["title"], done, todo_id),
                )
                updated = cur.rowcount
            if not updated:
                created_at = (record["created_at"] or datetime.now(timezone.utc)).isoformat()
                cur = conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.done}, {_COLS.created_at})
                    VALUES (?, ?, ?, ?)
                    """,
                    (todo_id, record["title"], done, created_at),
                )
                todo_id = cur.lastrowid
                logger.debug("Inserted todo %s", todo_id)
            row = self._select(conn, todo_id)
            assert row is not None
            return self._row_to_record(row)

    def delete_by_id(self, todo_id: int) -> None:
        if not _storable_id(todo_id):
            return
        with self._conn() as conn:
            conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
