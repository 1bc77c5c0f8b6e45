from __future__ import annotations

import datetime as dt
import json
from typing import Any, Iterable

from ..models import Entry, Order, normalize_date, utc_now
from ..repository import EntryRepository
from .utils import parse_rfc3339, to_float

STANDARD_FIELDS = ("date", "type", "note", "value")
RECENT_DAYS = 30


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_field_value(raw: str) -> Any:
    # form values that are valid JSON keep their type, anything else stays a string
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return raw


def entry_from_form(items: Iterable[tuple[str, str]]) -> Entry:
    """Build an Entry from submitted form fields.

    ``date`` (RFC 3339, defaults to now), ``type``, ``note`` and ``value`` map to
    the fixed fields. Every other field becomes extra data: each submitted value
    is JSON-decoded when possible, and a field sent more than once becomes a list.

    Raises ValueError for an unparseable date or value.
    """
    form: dict[str, list[str]] = {}
    for key, val in items:
        form.setdefault(key, []).append(val)

    def first(key: str) -> str:
        vals = form.get(key) or [""]
        return vals[0]

    date = utc_now()
    if first("date"):
        try:
            date = normalize_date(parse_rfc3339(first("date")))
        except ValueError as e:
            raise ValueError(f"value of 'date' ({first('date')!r}) is not a valid date: {e}") from None

    entry = Entry(date=date, type=first("type"), note=first("note"))

    if form.get("value"):
        try:
            entry.value = to_float(form["value"][0])
        except ValueError:
            raise ValueError(f"value {form['value'][0]!r} of 'value' is not a number") from None

    data: dict[str, Any] = {}
    for key, vals in form.items():
        if key in STANDARD_FIELDS:
            continue
        parsed = [_parse_field_value(v) for v in vals]
        data[key] = parsed[0] if len(parsed) == 1 else parsed
    entry.data = data
    return entry


def list_recent(repo: EntryRepository, days: int = RECENT_DAYS, now: dt.datetime | None = None) -> list[Entry]:
    """Entries from the last ``days`` days, newest first."""
    if days < 0:
        raise ValueError("days must not be negative")
    now = now or utc_now()
    return repo.find_between(now - dt.timedelta(days=days), now, Order.DESCENDING)
