"""EntryRepository protocol: the contract the HTTP layer and tests program against."""

from __future__ import annotations

import datetime as dt
from typing import Protocol, runtime_checkable

from ..models import Entry, Order


@runtime_checkable
class EntryRepository(Protocol):
    """Create/get/range-query over entries.

    Not-found is a valid result (``None``), never an error. Failures surface as
    StorageWriteError / StorageReadError / DataCorruptionError.
    """

    def create(self, entry: Entry) -> str:
        """Store ``entry`` under a freshly generated id and return that id.

        Any ``id`` already set on ``entry`` is ignored.
        """
        ...

    def get(self, entry_id: str) -> Entry | None:
        """Return the entry with exactly this id, or None."""
        ...

    def find_between(self, start: dt.datetime, end: dt.datetime, order: Order = Order.DESCENDING) -> list[Entry]:
        """Return entries dated within ``[start, end]`` (inclusive), sorted by date.

        Entries with identical dates have no defined relative order.
        """
        ...
