"""
Entry data access: SQL statements, id generation and the ``data`` column codec.
"""
from __future__ import annotations

import base64
import json
import math
import secrets
from sqlite3 import Connection, Row
from typing import Any, Optional

from ..models import Entry, Order, format_date, parse_date

ID_BYTES = 12

_COLUMNS = "id, date, type, note, value, data"

_ORDER_SQL = {
    Order.ASCENDING: "ASC",
    Order.DESCENDING: "DESC",
}


def generate_id() -> str:
    """12 secure random bytes, URL-safe base64 (16 chars, no padding needed)."""
    return base64.urlsafe_b64encode(secrets.token_bytes(ID_BYTES)).decode("ascii")


def encode_data(data: Optional[dict[str, Any]]) -> Optional[str]:
    """Serialize extra fields; empty or missing data is stored as NULL.

    Raises TypeError/ValueError for content that is not strict JSON.
    """
    if not data:
        return None
    return json.dumps(data, ensure_ascii=False, allow_nan=False)


def encode_value(value: Any) -> float:
    """The numeric measurement as a finite float; NaN and infinities raise ValueError."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"value {value!r} is not a finite number")
    return value


def decode_data(raw: Any) -> dict[str, Any]:
    """
    Inverse of :func:`encode_data`.

    NULL, empty and the JSON literal ``null`` all decode to an empty dict.
    Raises ValueError if the payload is not a JSON object.
    """
    if raw is None:
        return {}
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if not raw.strip():
        return {}
    data = json.loads(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def row_to_entry(row: Row) -> Entry:
    """Build an Entry from a row. Raises ValueError for undecodable date or data."""
    return Entry(
        id=row["id"],
        date=parse_date(row["date"]),
        type=row["type"] or "",
        note=row["note"] or "",
        value=float(row["value"] or 0.0),
        data=decode_data(row["data"]),
    )


def ensure_schema(conn: Connection, schema_sql: str) -> None:
    """Run each ``;``-separated statement; blank trailing pieces are skipped."""
    for stmt in schema_sql.split(";"):
        if stmt.strip():
            conn.execute(stmt)


def insert_entry(conn: Connection, entry_id: str, entry: Entry, value: float, data_json: Optional[str]) -> None:
    conn.execute(
        f"INSERT INTO entries({_COLUMNS}) VALUES(?,?,?,?,?,?)",
        (entry_id, format_date(entry.date), entry.type, entry.note, value, data_json),
    )


def get_row(conn: Connection, entry_id: str) -> Optional[Row]:
    return conn.execute(f"SELECT {_COLUMNS} FROM entries WHERE id=?", (entry_id,)).fetchone()


def list_between(conn: Connection, start_date: str, end_date: str, order: Order) -> list[Row]:
    return conn.execute(
        f"SELECT {_COLUMNS} FROM entries WHERE date >= ? AND date <= ? ORDER BY date {_ORDER_SQL[order]}",
        (start_date, end_date),
    ).fetchall()


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM entries").fetchone()["c"])
