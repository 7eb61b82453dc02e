"""
Pytest configuration for the user records store.

Provides fixtures for:
- Temporary database locations (one file per test)
- An opened store bound to that file
- Settings isolation (cache reset, env overrides)
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Generator

import pytest

from user_records.config import Settings, get_settings
from user_records.store.sqlite import SQLiteRecordStore


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """
    Clear the cached Settings around every test so env overrides take effect.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(data_dir=tmp_path / "data", log_level="DEBUG")


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """
    Location of a not-yet-created database file inside a fresh directory.
    """
    return tmp_path / "data" / "database.sqlite"


@pytest.fixture
def store(db_path: Path) -> Generator[SQLiteRecordStore, None, None]:
    """
    Provide an opened store; closed after the test.
    """
    record_store = SQLiteRecordStore(db_path)
    record_store.open()
    try:
        yield record_store
    finally:
        record_store.close()


@pytest.fixture
def raw_connection(store: SQLiteRecordStore) -> Generator[sqlite3.Connection, None, None]:
    """
    A second, independent connection to the store's file for tampering with
    rows or schema behind the store's back.
    """
    conn = sqlite3.connect(str(store.db_path))
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """
    Undo `configure_logging` side effects on the root logger.
    """
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
