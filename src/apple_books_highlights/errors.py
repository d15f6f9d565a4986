"""Exceptions raised while syncing Apple Books highlights."""
from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for failures that abort a sync."""


class SourceNotFoundError(SyncError):
    """Raised when one of the Apple Books databases cannot be located."""

    def __init__(self, store: str) -> None:
        self.store = store
        super().__init__(f"Apple Books {store} Database not found, cannot sync.")


class QueryError(SyncError):
    """Raised when the sqlite3 shell fails or returns unusable output."""


class RowFormatError(QueryError):
    """Raised when a decoded row has fewer fields than the query selects."""


class VaultError(SyncError):
    """Raised when the destination folder cannot be safely replaced."""
