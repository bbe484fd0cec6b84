"""Unindexed list backend: linear scans over an insertion-ordered list."""

from typing import List, Optional, Sequence

from sample_bench.base import Record, by_p


class ListBackend:
    """Baseline backend with no index at all."""

    name = "list"

    def __init__(self):
        self._container: Optional[List[Record]] = None

    async def prepare(self) -> None:
        self._container = []

    async def bulk_insert(self, records: Sequence[Record]) -> None:
        self._container.extend(records)

    async def insert(self, record: Record) -> None:
        self._container.append(record)

    def _index_of(self, p: float) -> int:
        for i, record in enumerate(self._container):
            if record["p"] == p:
                return i
        return -1

    async def find_one(self, p: float) -> Optional[Record]:
        i = self._index_of(p)
        return self._container[i] if i >= 0 else None

    async def range(self, lo: float, hi: float) -> List[Record]:
        # sorted() is stable, so equal keys stay in insertion order
        return sorted((r for r in self._container if lo <= r["p"] <= hi), key=by_p)

    async def remove(self, p: float) -> None:
        i = self._index_of(p)
        if i >= 0:
            del self._container[i]

    async def size(self) -> int:
        return len(self._container)

    async def close(self) -> None:
        self._container = None
