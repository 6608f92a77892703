"""SQLite storage of accounts and the shared database handle."""

from __future__ import annotations

import sqlite3
import threading
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

TABLE_NAME = "account"
DEFAULT_PATH = "sessiondemo.db"

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid TEXT NOT NULL,
    name TEXT NOT NULL,
    account TEXT NOT NULL,
    created_at INTEGER NOT NULL DEFAULT 0,
    updated_at INTEGER NOT NULL DEFAULT 0,
    deleted_at INTEGER NOT NULL DEFAULT 0
)
"""


class DatabaseError(RuntimeError):
    """Raised when the database cannot be opened or used."""


@dataclass
class AccountModel:
    """A row of the account table; deleted_at is 0 while the row is live."""

    id: int
    uuid: uuid.UUID
    name: str
    account: str
    created_at: int = 0
    updated_at: int = 0
    deleted_at: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> AccountModel:
        raw_uuid = row["uuid"]
        return cls(
            id=row["id"],
            uuid=uuid.UUID(raw_uuid) if raw_uuid else uuid.UUID(int=0),
            name=row["name"],
            account=row["account"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )


class Database:
    """A thread-safe SQLite connection."""

    def __init__(self, path: str = DEFAULT_PATH) -> None:
        try:
            self._conn = sqlite3.connect(path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise DatabaseError("数据库初始化失败") from exc
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.RLock()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def migrate(self) -> None:
        """Create the account table if it is missing."""
        with self._lock, self._conn:
            self._conn.execute(_SCHEMA)

    def execute(self, sql: str, params: Iterable[Any] = ()) -> int:
        """Run a statement in a transaction and return the affected row count."""
        try:
            with self._lock, self._conn:
                return self._conn.execute(sql, tuple(params)).rowcount
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def query(self, sql: str, params: Iterable[Any] = ()) -> list[sqlite3.Row]:
        """Run a query and return all rows."""
        try:
            with self._lock:
                return self._conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def close(self) -> None:
        with self._lock:
            self._conn.close()


_shared: Database | None = None
_shared_lock = threading.Lock()


def init_db(path: str = DEFAULT_PATH) -> Database:
    """Return the shared database, opening and migrating it on first use."""
    global _shared
    with _shared_lock:
        if _shared is None:
            db = Database(path)
            try:
                db.migrate()
            except sqlite3.Error:
                pass
            _shared = db
        return _shared


def reset_db() -> None:
    """Close and forget the shared database."""
    global _shared
    with _shared_lock:
        if _shared is not None:
            _shared.close()
            _shared = None