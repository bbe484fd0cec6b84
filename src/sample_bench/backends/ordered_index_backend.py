"""Reference backend on top of :class:`OrderedIndex`."""

from typing import List, Optional, Sequence

from sample_bench.base import Record
from sample_bench.ordered_index import OrderedIndex


class OrderedIndexBackend:
    """Exposes an OrderedIndex through the storage backend protocol."""

    name = "ordered-index"

    def __init__(self):
        self.index: Optional[OrderedIndex] = None

    async def prepare(self) -> None:
        self.index = OrderedIndex()

    async def bulk_insert(self, records: Sequence[Record]) -> None:
        self.index.bulk_insert(records)

    async def insert(self, record: Record) -> None:
        self.index.insert(record)

    async def find_one(self, p: float) -> Optional[Record]:
        return self.index.get(p)

    async def range(self, lo: float, hi: float) -> List[Record]:
        # The backend contract is inclusive on both ends
        return self.index.get_range(lo, hi, include_high=True)

    async def remove(self, p: float) -> None:
        self.index.delete(p)

    async def size(self) -> int:
        return self.index.count()

    async def close(self) -> None:
        self.index = None

    def check_invariant(self) -> None:
        if self.index is not None:
            self.index.check_invariant()
