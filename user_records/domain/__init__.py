"""
Domain package for the user records store.

Exports the core domain models used by the store and the presentation layer.
Keep this package focused on data definitions and validation concerns.
"""

from user_records.domain.models import Record

__all__ = [
    "Record",
]
