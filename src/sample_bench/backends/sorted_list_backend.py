"""Backend on ``sortedcontainers.SortedKeyList``.

Entries are keyed like the OrderedIndex, ``(p, seq)``, so both backends
agree on order and tie-breaking while using different structures
underneath (a list of sublists here, one flat array there).
"""
import math
from operator import attrgetter
from typing import List, Optional, Sequence

from sortedcontainers import SortedKeyList

from sample_bench.base import Entry, Record, by_p


class SortedListBackend:
    """Comparison backend built on a third-party sorted container."""

    name = "sorted-list"

    def __init__(self, by=by_p):
        self.by = by
        self._container: Optional[SortedKeyList] = None
        self._seq = 0

    def _entry(self, record: Record) -> Entry:
        self._seq += 1
        return Entry((self.by(record), self._seq), record)

    async def prepare(self) -> None:
        self._container = SortedKeyList(key=attrgetter("key"))
        self._seq = 0

    async def bulk_insert(self, records: Sequence[Record]) -> None:
        self._container.update([self._entry(record) for record in records])

    async def insert(self, record: Record) -> None:
        self._container.add(self._entry(record))

    def _position(self, p: float) -> int:
        container = self._container
        i = container.bisect_key_left((p,))
        if i < len(container) and container[i].p == p:
            return i
        return -1

    async def find_one(self, p: float) -> Optional[Record]:
        i = self._position(p)
        return self._container[i].record if i >= 0 else None

    async def range(self, lo: float, hi: float) -> List[Record]:
        if lo > hi or lo != lo or hi != hi:
            return []
        return [
            entry.record
            for entry in self._container.irange_key((lo,), (hi, math.inf))
        ]

    async def remove(self, p: float) -> None:
        i = self._position(p)
        if i >= 0:
            del self._container[i]

    async def size(self) -> int:
        return len(self._container)

    async def close(self) -> None:
        self._container = None
