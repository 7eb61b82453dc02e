"""
User Records - a small persistence layer for user entries (name, age, email).

This package provides:

- A frozen `Record` model
- `SQLiteRecordStore`, the sole owner of the SQLite connection, exposing
  insert / update / fetch_all / delete
- Typed errors (`StoreUnavailable`, `QueryFailed`)
- Settings, structured logging, and a `records` command-line front end

Records live in a single `database.sqlite` file in a per-user data directory.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from user_records.config import Settings, get_settings
from user_records.domain.models import Record
from user_records.exceptions import (
    QueryFailed,
    RecordDecodeError,
    RecordStoreError,
    StoreUnavailable,
)
from user_records.infrastructure.db_factory import resolve_db_path
from user_records.store.abstract import AbstractRecordStore, RecordStore
from user_records.store.sqlite import SQLiteRecordStore
from user_records.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Record",
    # Store
    "RecordStore",
    "AbstractRecordStore",
    "SQLiteRecordStore",
    "resolve_db_path",
    # Errors
    "RecordStoreError",
    "StoreUnavailable",
    "QueryFailed",
    "RecordDecodeError",
    # Logging
    "configure_logging",
    "get_logger",
]
