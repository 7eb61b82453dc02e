"""
Abstract store interfaces for the user records layer.

The presentation layer depends on the `RecordStore` protocol only, so any
backend that honours these CRUD contracts (including the silent no-op on a
missing id for `update` and `delete`) can be injected in its place.
"""

from __future__ import annotations

import abc
from typing import List, Protocol, runtime_checkable

from user_records.domain.models import Record


@runtime_checkable
class RecordStore(Protocol):
    """
    Common interface every record store must implement.
    """

    def insert(self, name: str, age: int, email: str) -> int:
        """
        Persist a new record and return the id the store assigned to it.
        """
        ...

    def update(self, record_id: int, name: str, age: int, email: str) -> None:
        """
        Replace name, age and email of the row keyed by `record_id`.

        Targeting a missing id affects no rows and is not an error.
        """
        ...

    def fetch_all(self) -> List[Record]:
        """
        Return a fully materialized snapshot of every stored record.

        Ordering is store-defined.
        """
        ...

    def delete(self, record_id: int) -> None:
        """
        Remove the row keyed by `record_id`. A missing id is a no-op.
        """
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


class AbstractRecordStore(abc.ABC):
    """
    ABC helper for class-based stores.

    Subclasses implement the four CRUD operations plus `close`; `save` and the
    context-manager protocol come for free.
    """

    @abc.abstractmethod
    def insert(self, name: str, age: int, email: str) -> int:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def update(self, record_id: int, name: str, age: int, email: str) -> None:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_all(self) -> List[Record]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, record_id: int) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def open(self) -> None:
        """Acquire resources ahead of the first operation. No-op by default."""

    def save(self, record: Record) -> int:
        """
        Insert `record` if it has no id yet, otherwise update it in place.

        Returns
        -------
        int
            The id of the stored row.
        """
        if record.id is None:
            return self.insert(record.name, record.age, record.email)
        self.update(record.id, record.name, record.age, record.email)
        return record.id

    def __enter__(self) -> "AbstractRecordStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "RecordStore",
    "AbstractRecordStore",
]
