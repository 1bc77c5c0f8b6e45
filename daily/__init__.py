"""daily: a personal log of timestamped entries (mood, coffee, expenses, notes).

SQLite-backed storage with a thin FastAPI layer on top.
"""
from __future__ import annotations

__version__ = "0.1.0"
