from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from threading import RLock
from typing import Generator, Optional

from .errors import StoreFailure
from .models import TimerEntity, as_utc, utcnow
from .repositories import Repository, new_timer_id
from .schemas import TimerCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "timers"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    date: str = "date"
    created_at: str = "created_at"
    updated_at: str = "updated_at"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.

    One connection is held between open() and close(); access is serialized
    with a lock since FastAPI runs sync handlers in a thread pool.
    """

    name = "sqlite"

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._lock = RLock()
        self._connection: Optional[sqlite3.Connection] = None

    def open(self) -> None:
        with self._lock:
            if self._connection is not None:
                return
            try:
                if self._db_path != ":memory:":
                    os.makedirs(os.path.dirname(self._db_path) or ".", exist_ok=True)
                conn = sqlite3.connect(self._db_path, check_same_thread=False)
                conn.row_factory = sqlite3.Row
                self._connection = conn
                self._init_db()
            except (OSError, sqlite3.Error) as e:
                raise StoreFailure(f"Unable to open sqlite store at {self._db_path}") from e
        logger.info("Opened sqlite store at %s", self._db_path)

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None
        logger.info("Closed sqlite store at %s", self._db_path)

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        with self._lock:
            if self._connection is None:
                raise StoreFailure("sqlite store is not open")
            conn = self._connection
            try:
                yield conn
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StoreFailure(str(e)) from e

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} TEXT PRIMARY KEY,
                    {_COLS.title} TEXT NOT NULL,
                    {_COLS.description} TEXT NULL,
                    {_COLS.date} TEXT NOT NULL,
                    {_COLS.created_at} TEXT NOT NULL,
                    {_COLS.updated_at} TEXT NOT NULL
                )
                """
            )

    def _row_to_entity(self, row: sqlite3.Row) -> TimerEntity:
        def parse_dt(s: str) -> datetime:
            return as_utc(datetime.fromisoformat(s))

        return {
            "id": str(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "description": row[_COLS.description],
            "date": parse_dt(row[_COLS.date]),
            "created_at": parse_dt(row[_COLS.created_at]),
            "updated_at": parse_dt(row[_COLS.updated_at]),
        }

    def create(self, data: TimerCreate) -> TimerEntity:
        now = utcnow().isoformat()
        new_id = new_timer_id()
        with self._conn() as conn:
            conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.description},
                    {_COLS.date}, {_COLS.created_at}, {_COLS.updated_at})
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (new_id, data.title, data.description, as_utc(data.date).isoformat(), now, now),
            )
            row = conn.execute(
                f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (new_id,)
            ).fetchone()
            assert row is not None
            return self._row_to_entity(row)

    def get(self, timer_id: str) -> Optional[TimerEntity]:
        with self._conn() as conn:
            row = conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (timer_id,)).fetchone()
            return self._row_to_entity(row) if row else None
