"""
SQLite-backed record store.

`SQLiteRecordStore` owns exactly one connection for its lifetime. Opening is
idempotent and ensures the `Users` table exists; every CRUD call runs a single
parameterized statement on a cursor that is closed on every exit path, inside a
transaction that commits on success and rolls back on failure.

Calls are serialized with a lock, so one instance can be shared between threads.
There is no retry and no timeout: a failed statement raises `QueryFailed` once.

Example
-------
    with SQLiteRecordStore(db_path) as store:
        store.insert("Alice", 30, "a@x.com")
        records = store.fetch_all()
"""

from __future__ import annotations

import sqlite3
import threading
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Generator, List, Optional, Sequence

from pydantic import ValidationError

from user_records.domain.models import Record
from user_records.exceptions import QueryFailed, RecordDecodeError, StoreUnavailable
from user_records.infrastructure.db_factory import open_connection, resolve_db_path
from user_records.store.abstract import AbstractRecordStore
from user_records.utils.logging import get_logger

log = get_logger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS Users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    age INTEGER,
    email TEXT
);
"""
INSERT_SQL = "INSERT INTO Users (name, age, email) VALUES (?, ?, ?);"
UPDATE_SQL = "UPDATE Users SET name = ?, age = ?, email = ? WHERE id = ?;"
SELECT_ALL_SQL = "SELECT id, name, age, email FROM Users;"
DELETE_SQL = "DELETE FROM Users WHERE id = ?;"

_COLUMNS = ("id", "name", "age", "email")

# Range of an SQLite INTEGER; no row can carry an id outside it.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

# OverflowError and UnicodeEncodeError come from binding unrepresentable parameters.
_QUERY_ERRORS = (sqlite3.Error, OverflowError, UnicodeEncodeError)


def _decode_text(value: object) -> object:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _is_storable_id(record_id: int) -> bool:
    return SQLITE_INT_MIN <= record_id <= SQLITE_INT_MAX


def _decode_row(row: Sequence[object]) -> Record:
    """Build a Record from a `SELECT_ALL_SQL` row."""
    try:
        record = Record.model_validate(dict(zip(_COLUMNS, map(_decode_text, row))))
    except UnicodeDecodeError as exc:
        raise RecordDecodeError("fetch_all", f"row {tuple(row)!r} is not valid UTF-8: {exc}") from exc
    except ValidationError as exc:
        raise RecordDecodeError("fetch_all", f"undecodable row {tuple(row)!r}: {exc}") from exc
    if record.id is None:
        raise RecordDecodeError("fetch_all", f"row without id: {tuple(row)!r}")
    return record


class SQLiteRecordStore(AbstractRecordStore):
    """
    Persistence access component over a single SQLite file.

    Parameters
    ----------
    db_path : Path | str | None
        Database file location. When None, resolved from settings at open time
        (see `resolve_db_path`).
    """

    def __init__(self, db_path: Optional[Path | str] = None) -> None:
        self._db_path: Optional[Path] = Path(db_path) if db_path is not None else None
        self._conn: Optional[sqlite3.Connection] = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def db_path(self) -> Optional[Path]:
        """Resolved database location, or None before the first open."""
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # Lifecycle -----------------------------------------------------------------

    def open(self) -> None:
        """
        Open the connection and ensure the schema exists (idempotent).

        Raises
        ------
        StoreUnavailable
            If the database cannot be opened or the store was closed.
        QueryFailed
            If the schema statement fails.
        """
        with self._lock:
            self._ensure_open()

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                log.info("Closed database", extra={"db_path": str(self._db_path)})
            self._closed = True

    def _ensure_open(self) -> sqlite3.Connection:
        if self._closed:
            raise StoreUnavailable("record store has been closed", path=self._db_path)
        if self._conn is not None:
            return self._conn

        if self._db_path is None:
            self._db_path = resolve_db_path()
        conn = open_connection(self._db_path)
        try:
            with conn:
                with closing(conn.cursor()) as cur:
                    cur.execute(CREATE_TABLE_SQL)
        except sqlite3.Error as exc:
            conn.close()
            log.error("Error creating table", extra={"error": str(exc)})
            raise QueryFailed("create_table", str(exc)) from exc

        # Text comes back as raw bytes so `_decode_row` can report bad encodings.
        conn.text_factory = bytes
        self._conn = conn
        log.debug("Users table ready", extra={"db_path": str(self._db_path)})
        return conn

    @contextmanager
    def _cursor(self, operation: str) -> Generator[sqlite3.Cursor, None, None]:
        """
        Yield a cursor inside a transaction; caller must hold the lock.

        sqlite errors and parameter binding errors are converted to
        `QueryFailed` after rollback.
        """
        conn = self._ensure_open()
        try:
            with conn:
                with closing(conn.cursor()) as cur:
                    yield cur
        except _QUERY_ERRORS as exc:
            log.warning(
                f"Error during {operation}",
                extra={"operation": operation, "error": str(exc)},
            )
            raise QueryFailed(operation, str(exc)) from exc

    # CRUD ----------------------------------------------------------------------

    def insert(self, name: str, age: int, email: str) -> int:
        with self._lock:
            with self._cursor("insert") as cur:
                cur.execute(INSERT_SQL, (name, age, email))
                record_id = cur.lastrowid
        log.debug("Record inserted", extra={"record_id": record_id})
        return int(record_id)

    def update(self, record_id: int, name: str, age: int, email: str) -> None:
        if not _is_storable_id(record_id):
            self.open()
            log.debug("Update matched no rows", extra={"record_id": record_id})
            return
        with self._lock:
            with self._cursor("update") as cur:
                cur.execute(UPDATE_SQL, (name, age, email, record_id))
                affected = cur.rowcount
        if affected == 0:
            log.debug("Update matched no rows", extra={"record_id": record_id})
        else:
            log.debug("Record updated", extra={"record_id": record_id})

    def fetch_all(self) -> List[Record]:
        with self._lock:
            with self._cursor("fetch_all") as cur:
                cur.execute(SELECT_ALL_SQL)
                rows = cur.fetchall()
        records = [_decode_row(row) for row in rows]
        log.debug("Fetched records", extra={"rows": len(records)})
        return records

    def delete(self, record_id: int) -> None:
        if not _is_storable_id(record_id):
            self.open()
            log.debug("Delete matched no rows", extra={"record_id": record_id})
            return
        with self._lock:
            with self._cursor("delete") as cur:
                cur.execute(DELETE_SQL, (record_id,))
                affected = cur.rowcount
        if affected == 0:
            log.debug("Delete matched no rows", extra={"record_id": record_id})
        else:
            log.debug("Record deleted", extra={"record_id": record_id})

    def __enter__(self) -> "SQLiteRecordStore":
        self.open()
        return self

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("open" if self._conn is not None else "new")
        return f"SQLiteRecordStore(db_path={str(self._db_path)!r}, state={state})"


__all__ = [
    "SQLiteRecordStore",
    "CREATE_TABLE_SQL",
]
