"""
Leasing Tracker Exceptions

Every failure the tracker surfaces to a user derives from LeasingError.
Handlers at the operation boundary (web routes, CLI) catch these and turn
them into a transient notification; none of them should crash the process.
"""

from __future__ import annotations

from typing import Any, Optional


class LeasingError(Exception):
    """Base class for leasing tracker errors."""

    pass


class ValidationError(LeasingError, ValueError):
    """Raised when an imported row cannot be turned into an entry."""

    def __init__(
        self,
        message: str,
        row_number: Optional[int] = None,
        raw_row: Optional[dict[str, Any]] = None,
    ):
        self.row_number = row_number
        self.raw_row = raw_row
        super().__init__(message)


class StorageError(LeasingError):
    """Raised when persisted data cannot be read or written."""

    pass


class TranslationError(LeasingError):
    """Raised when the translation collaborator fails or returns bad data."""

    pass


class EntryNotFoundError(LeasingError, KeyError):
    """Raised when an entry id is not present in the store."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Entry {entry_id} not found")

    def __str__(self) -> str:
        return f"Entry {self.entry_id} not found"
