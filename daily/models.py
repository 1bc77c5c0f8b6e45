"""Core data models: the Entry record and date helpers shared by storage and API."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Fixed width (zero-padded year), so lexical order of stored dates equals chronological order.
DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d{3})Z$", re.ASCII)


class Order(Enum):
    """Sort direction for range queries, applied to the entry date."""

    ASCENDING = "asc"
    DESCENDING = "desc"


def normalize_date(value: dt.datetime) -> dt.datetime:
    """Return ``value`` in UTC, truncated to millisecond precision.

    Naive datetimes are taken to already be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    else:
        value = value.astimezone(dt.timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utc_now() -> dt.datetime:
    return normalize_date(dt.datetime.now(dt.timezone.utc))


def format_date(value: dt.datetime) -> str:
    """Serialize a datetime to the on-disk form, e.g. ``2024-05-01T08:30:00.250Z``."""
    d = normalize_date(value)
    return (
        f"{d.year:04d}-{d.month:02d}-{d.day:02d}"
        f"T{d.hour:02d}:{d.minute:02d}:{d.second:02d}.{d.microsecond // 1000:03d}Z"
    )


def parse_date(raw: str) -> dt.datetime:
    """Inverse of :func:`format_date`. Raises ValueError on anything else."""
    m = DATE_RE.match(raw)
    if m is None:
        raise ValueError(f"date {raw!r} is not in YYYY-MM-DDTHH:MM:SS.mmmZ form")
    year, month, day, hour, minute, second, millis = (int(g) for g in m.groups())
    return dt.datetime(year, month, day, hour, minute, second, millis * 1000, tzinfo=dt.timezone.utc)


@dataclass
class Entry:
    """One logged record.

    Attributes:
        id: Opaque URL-safe identifier, assigned by the repository on create.
        date: When the entry happened (UTC, millisecond precision).
        type: Free-text category label, e.g. "mood", "coffee", "expense".
        note: Optional free-text annotation.
        value: The single numeric measurement.
        data: Extra user-defined fields, any JSON-compatible values.
    """

    type: str = ""
    value: float = 0.0
    note: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    date: dt.datetime = field(default_factory=utc_now)
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON view; ``note`` and ``data`` are omitted when empty."""
        out: dict[str, Any] = {
            "id": self.id,
            "date": format_date(self.date),
            "type": self.type,
        }
        if self.note:
            out["note"] = self.note
        out["value"] = self.value
        if self.data:
            out["data"] = self.data
        return out

    def __repr__(self) -> str:
        return f"Entry(id='{self.id}', type='{self.type}', date='{format_date(self.date)}', value={self.value})"
