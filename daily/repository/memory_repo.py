"""In-memory EntryRepository for tests; no storage engine involved."""

from __future__ import annotations

import datetime as dt
import threading
from dataclasses import replace

from ..errors import DataCorruptionError, IdentifierGenerationError, StorageWriteError
from ..models import Entry, Order, normalize_date
from . import entry_repo


class InMemoryRepository:
    """Same contract as SqliteRepository, rows kept in a dict.

    ``data`` goes through the same JSON codec as on disk so round-trip
    behaviour matches.
    """

    def __init__(self):
        self._rows: dict[str, tuple[Entry, str | None]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._rows)

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

        stored = replace(entry, id=entry_id, date=normalize_date(entry.date), value=value, data={})
        with self._lock:
            self._rows[entry_id] = (stored, data_json)
        return entry_id

    def _load(self, operation: str, entry_id: str) -> Entry:
        stored, data_json = self._rows[entry_id]
        try:
            data = entry_repo.decode_data(data_json)
        except (ValueError, RecursionError) as e:
            raise DataCorruptionError(operation, f"stored entry is invalid: {e}", entry_id) from e
        return replace(stored, data=data)

    def get(self, entry_id: str) -> Entry | None:
        with self._lock:
            if entry_id not in self._rows:
                return None
            return self._load("get", entry_id)

    def find_between(self, start: dt.datetime, end: dt.datetime, order: Order = Order.DESCENDING) -> list[Entry]:
        order = Order(order)
        lo, hi = normalize_date(start), normalize_date(end)
        with self._lock:
            hits = [self._load("find_between", k) for k, (e, _) in self._rows.items() if lo <= e.date <= hi]
        hits.sort(key=lambda e: e.date, reverse=order is Order.DESCENDING)
        return hits
