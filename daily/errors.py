"""
daily exception hierarchy.

Every error raised by the storage layer inherits from DailyError, so callers can
catch library-level failures in one place and still tell the failure modes apart.
"""
from __future__ import annotations


class DailyError(Exception):
    """Base exception class for all daily errors."""


class ConfigurationError(DailyError):
    """Raised for configuration errors (unreadable file, invalid values)."""


class SchemaInitError(DailyError):
    """Raised when the storage schema cannot be read or applied at startup."""


class IdentifierGenerationError(DailyError):
    """Raised when the secure random source fails while generating an entry id."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class StorageError(DailyError):
    """A storage operation failed.

    Carries the operation name and, where one applies, the entry id so the
    failure can be logged meaningfully. The underlying error is chained as
    ``__cause__``.
    """

    def __init__(self, operation: str, message: str, entry_id: str | None = None):
        self.operation = operation
        self.entry_id = entry_id
        prefix = f"{operation}"
        if entry_id is not None:
            prefix += f" [{entry_id}]"
        super().__init__(f"{prefix}: {message}")


class StorageWriteError(StorageError):
    """Raised when a row cannot be written."""


class StorageReadError(StorageError):
    """Raised when rows cannot be read. Not raised for a missing entry."""


class DataCorruptionError(StorageError):
    """Raised when a stored row cannot be decoded (bad JSON data or bad date)."""
