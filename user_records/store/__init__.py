"""
Store package for the user records layer.

Re-exports the store interfaces and the SQLite implementation so downstream
code can import from `user_records.store` directly.
"""

from user_records.store.abstract import AbstractRecordStore, RecordStore
from user_records.store.sqlite import SQLiteRecordStore

__all__ = [
    "AbstractRecordStore",
    "RecordStore",
    "SQLiteRecordStore",
]
