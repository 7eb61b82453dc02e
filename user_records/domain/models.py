"""
Domain models for the user records store.

Defines the record schema aligned with the `Users` table. Records are frozen
value snapshots: reads return independent copies with no link back to the store.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Record(BaseModel):
    """
    Representation of a single row in the `Users` table.
    """

    id: Optional[int] = Field(
        None, description="Primary key (AUTOINCREMENT). None until first persisted."
    )
    name: str = Field(..., description="Display name; no length constraint.")
    age: int = Field(..., description="Age in years; 0-100 by caller convention.")
    email: str = Field(..., description="Contact email; not format-validated.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @property
    def is_persisted(self) -> bool:
        """Whether the store has assigned an id to this record."""
        return self.id is not None


__all__ = ["Record"]
