"""
Error taxonomy for the user records store.

`StoreUnavailable` is fatal: the connection could not be opened (or the store
was already closed) and no operation can proceed. `QueryFailed` is recoverable
at the call-site; the store is left unchanged and the caller decides whether to
retry the user action.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class RecordStoreError(Exception):
    """Base class for all errors raised by the records store."""


class StoreUnavailable(RecordStoreError):
    """
    The database connection could not be opened or has been closed.

    Attributes
    ----------
    path : Path | None
        Database file location the store was bound to, when known.
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class QueryFailed(RecordStoreError):
    """
    A statement failed to prepare or execute.

    Attributes
    ----------
    operation : str
        Short name of the failing operation (e.g. "insert", "fetch_all").
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.diagnostic = message


class RecordDecodeError(QueryFailed):
    """A fetched row could not be decoded into a Record."""


__all__ = [
    "RecordStoreError",
    "StoreUnavailable",
    "QueryFailed",
    "RecordDecodeError",
]
