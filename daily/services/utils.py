from __future__ import annotations

import datetime as dt
import math


def parse_rfc3339(s: str) -> dt.datetime:
    """'2024-05-01T08:30:00Z' / '...+02:00' -> aware datetime. A zone offset is required."""
    raw = s.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    value = dt.datetime.fromisoformat(raw)
    if value.tzinfo is None:
        raise ValueError(f"{s!r} has no time zone offset")
    return value


def to_float(s: str) -> float:
    """Parse a finite float; 'nan' and 'inf' are rejected with ValueError."""
    value = float(s.strip())
    if not math.isfinite(value):
        raise ValueError(f"{s!r} is not a finite number")
    return value
