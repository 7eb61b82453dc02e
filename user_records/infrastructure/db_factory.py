"""
Database connection factory utilities for the user records store.

Resolves where the SQLite file lives and opens the single connection the store
owns. Any failure to reach a usable database file surfaces as `StoreUnavailable`
so callers get one fatal error type at startup.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from user_records.config import get_settings
from user_records.exceptions import StoreUnavailable
from user_records.utils.logging import get_logger

log = get_logger(__name__)

DB_FILENAME = "database.sqlite"
APP_DIRNAME = "user-records"


def default_data_dir() -> Path:
    """Per-user, application-private directory holding the database file."""
    return Path.home() / ".local" / "share" / APP_DIRNAME


def resolve_db_path(data_dir: Optional[Path | str] = None) -> Path:
    """
    Compose the database file path.

    Parameters
    ----------
    data_dir : Path | str | None
        Directory override. Falls back to `Settings.data_dir`, then to
        `default_data_dir()`.

    Returns
    -------
    Path
        Location of `database.sqlite`.
    """
    if data_dir is None:
        data_dir = get_settings().data_dir or default_data_dir()
    return Path(data_dir).expanduser() / DB_FILENAME


def open_connection(path: Path) -> sqlite3.Connection:
    """
    Open (creating if absent) a SQLite connection to `path`.

    The connection is probed with a trivial query so that an unusable file
    fails here rather than on the first statement.

    Raises
    ------
    StoreUnavailable
        If the directory cannot be created or the database cannot be opened.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        log.error(
            "Cannot create database directory",
            extra={"db_path": str(path), "error": str(exc)},
        )
        raise StoreUnavailable(f"cannot create directory for {path}: {exc}", path=path) from exc

    conn: Optional[sqlite3.Connection] = None
    try:
        conn = sqlite3.connect(str(path), check_same_thread=False)
        conn.execute("PRAGMA schema_version;").fetchone()
    except sqlite3.Error as exc:
        if conn is not None:
            conn.close()
        log.error(
            "Error opening database",
            extra={"db_path": str(path), "error": str(exc)},
        )
        raise StoreUnavailable(f"cannot open database at {path}: {exc}", path=path) from exc

    log.info("Opened database", extra={"db_path": str(path)})
    return conn


__all__ = [
    "DB_FILENAME",
    "default_data_dir",
    "resolve_db_path",
    "open_connection",
]
