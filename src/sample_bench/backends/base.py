"""Storage backend protocol definition."""

from typing import List, Optional, Protocol, Sequence

from sample_bench.base import Record


class StorageBackend(Protocol):
    """
    Protocol every benchmarked storage backend implements.

    All operations are coroutines; a backend may suspend while doing I/O or
    waiting on a worker. The harness awaits each call before issuing the
    next, so implementations never see overlapping calls. Backend state is
    created by :meth:`prepare` and belongs to one pass only.
    """

    name: str

    async def prepare(self) -> None:
        """Allocate and initialise backend state."""
        ...

    async def bulk_insert(self, records: Sequence[Record]) -> None:
        """Insert all records in one call."""
        ...

    async def insert(self, record: Record) -> None:
        """Insert a single record."""
        ...

    async def find_one(self, p: float) -> Optional[Record]:
        """Return one record with key ``p``, or None if there is none."""
        ...

    async def range(self, lo: float, hi: float) -> List[Record]:
        """Return records with ``lo <= p <= hi`` ascending by ``p``."""
        ...

    async def remove(self, p: float) -> None:
        """Remove the record :meth:`find_one` returns for ``p``; no-op if absent."""
        ...

    async def size(self) -> int:
        """Number of records currently held."""
        ...

    async def close(self) -> None:
        """Release resources. Safe to call after a failed or skipped prepare."""
        ...
