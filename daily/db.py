from __future__ import annotations

# daily/db.py
import os
import sqlite3

MEMORY_DB = ":memory:"


def ensure_parent_dir(db_path: str) -> None:
    """Create the directory holding ``db_path`` so SQLite can create the file."""
    if db_path == MEMORY_DB or db_path.startswith("file:"):
        return
    dirn = os.path.dirname(os.path.abspath(db_path)) or "."
    os.makedirs(dirn, exist_ok=True)


def open_conn(db_path: str) -> sqlite3.Connection:
    """
    Open a SQLite connection for long-lived, process-wide use.

    Autocommit mode (isolation_level=None): every statement is its own
    transaction. The connection may be handed between request threads, callers
    serialize access to it.
    """
    ensure_parent_dir(db_path)
    conn = sqlite3.connect(
        db_path,
        check_same_thread=False,
        isolation_level=None,
    )
    conn.row_factory = sqlite3.Row
    return conn
