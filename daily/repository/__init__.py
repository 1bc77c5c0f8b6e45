"""Repository layer: entry storage (SQLite) behind a small synchronous interface.

Keep SQL in ``entry_repo``; callers go through an ``EntryRepository``.
"""
from __future__ import annotations

from .base import EntryRepository
from .memory_repo import InMemoryRepository
from .sqlite_repo import SqliteRepository, init_schema, new_repository

__all__ = [
    "EntryRepository",
    "InMemoryRepository",
    "SqliteRepository",
    "init_schema",
    "new_repository",
]
