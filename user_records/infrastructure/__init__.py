"""
Infrastructure package for the user records store.

Centralizes database connectivity concerns (path resolution, opening the
connection). Keep this layer focused on I/O and resource management, decoupled
from the CRUD logic in `user_records.store`.
"""

from user_records.infrastructure.db_factory import (
    DB_FILENAME,
    default_data_dir,
    open_connection,
    resolve_db_path,
)

__all__ = [
    "DB_FILENAME",
    "default_data_dir",
    "open_connection",
    "resolve_db_path",
]
