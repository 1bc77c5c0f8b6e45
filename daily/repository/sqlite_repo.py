"""SQLite-backed EntryRepository."""

from __future__ import annotations

import datetime as dt
import logging
import sqlite3
import threading

from ..db import open_conn
from ..errors import (
    DataCorruptionError,
    IdentifierGenerationError,
    SchemaInitError,
    StorageReadError,
    StorageWriteError,
)
from ..models import Entry, Order, format_date
from . import entry_repo

logger = logging.getLogger(__name__)


def init_schema(conn: sqlite3.Connection, schema_path: str) -> None:
    """Apply the schema file to ``conn``. Safe to run repeatedly."""
    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
    except OSError as e:
        raise SchemaInitError(f"could not read schema sql from {schema_path!r}: {e}") from e
    try:
        entry_repo.ensure_schema(conn, schema_sql)
    except sqlite3.Error as e:
        raise SchemaInitError(f"could not apply schema from {schema_path!r}: {e}") from e


def new_repository(db_path: str, schema_path: str) -> "SqliteRepository":
    """Open (creating if needed) the database file and bootstrap its schema."""
    logger.info("Opening database %r", db_path)
    try:
        conn = open_conn(db_path)
    except (OSError, sqlite3.Error) as e:
        raise SchemaInitError(f"could not open db in {db_path!r}: {e}") from e
    try:
        init_schema(conn, schema_path)
    except SchemaInitError:
        conn.close()
        raise
    return SqliteRepository(conn)


class SqliteRepository:
    """
    EntryRepository over one shared SQLite connection.

    Each call is a single statement in autocommit mode; the lock only keeps
    concurrent request threads from interleaving on the shared connection.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self._lock = threading.Lock()

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def create(self, entry: Entry) -> str:
        try:
            entry_id = entry_repo.generate_id()
        except (OSError, NotImplementedError) as e:
            raise IdentifierGenerationError("create", f"could not generate id: {e}") from e

        try:
            value = entry_repo.encode_value(entry.value)
            data_json = entry_repo.encode_data(entry.data)
        except (TypeError, ValueError, RecursionError) as e:
            raise StorageWriteError("create", f"could not serialize entry: {e}", entry_id) from e

        try:
            with self._lock:
                entry_repo.insert_entry(self._conn, entry_id, entry, value, data_json)
        except sqlite3.Error as e:
            raise StorageWriteError("create", f"could not store entry: {e}", entry_id) from e

        logger.debug("created entry %s (type=%r)", entry_id, entry.type)
        return entry_id

    def get(self, entry_id: str) -> Entry | None:
        try:
            with self._lock:
                row = entry_repo.get_row(self._conn, entry_id)
        except sqlite3.Error as e:
            raise StorageReadError("get", f"could not get entry: {e}", entry_id) from e

        if row is None:
            return None
        try:
            return entry_repo.row_to_entry(row)
        except (ValueError, RecursionError) as e:
            raise DataCorruptionError("get", f"stored entry is invalid: {e}", entry_id) from e

    def find_between(self, start: dt.datetime, end: dt.datetime, order: Order = Order.DESCENDING) -> list[Entry]:
        order = Order(order)
        try:
            with self._lock:
                rows = entry_repo.list_between(self._conn, format_date(start), format_date(end), order)
        except sqlite3.Error as e:
            raise StorageReadError("find_between", f"could not list entries: {e}") from e

        entries: list[Entry] = []
        for row in rows:
            try:
                entries.append(entry_repo.row_to_entry(row))
            except (ValueError, RecursionError) as e:
                # one bad row fails the whole query
                raise DataCorruptionError("find_between", f"stored entry is invalid: {e}", row["id"]) from e
        return entries
