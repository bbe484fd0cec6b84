"""Ordered in-memory index of sample records.

Records are kept in one array sorted by the composite key ``(p, seq)``,
where ``seq`` is a per-index insertion counter. Every operation locates its
position with the same binary search over that key, so insertion points,
point lookups and range boundaries always agree with each other.

Splicing into the array is O(n) in the worst case. That is fine at
benchmark scale; a balanced tree or skip list keyed the same way would give
O(log n) inserts with identical ordering and tie-breaking.
"""
import logging
import math
from bisect import bisect_left, bisect_right
from heapq import merge
from operator import attrgetter
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from sample_bench.base import Entry, Key, Record, by_p
from sample_bench.invariants import InvariantError, check_index
from sample_bench.logging_config import get_logger

logger = get_logger("OrderedIndex")

_entry_key = attrgetter("key")


class OrderedIndex:
    """
    Duplicate-tolerant ordered collection of records.

    Records sharing the same ``p`` are all kept and ordered by insertion;
    lookups and deletes address the earliest inserted one.
    """
    __slots__ = ("by", "_entries", "_keys", "_seq")

    def __init__(self, by: Callable[[Record], float] = by_p, initial: Iterable[Record] = ()):
        self.by = by
        self._entries: List[Entry] = []
        self._keys: List[Key] = []      # Parallel to _entries for fast bisect
        self._seq = 0
        self.bulk_insert(initial)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Record]:
        for entry in self._entries:
            yield entry.record

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(count={len(self._keys)}, next_seq={self._seq + 1})"

    def _make_key(self, record: Record) -> Key:
        p = self.by(record)
        if p != p:
            raise ValueError(f"Cannot index a NaN key (record={record!r})")
        self._seq += 1
        return (p, self._seq)

    def _lower_bound(self, p: float) -> int:
        # (p,) sorts before every (p, seq), so this lands on the lowest seq
        return bisect_left(self._keys, (p,))

    def _upper_bound(self, p: float) -> int:
        return bisect_right(self._keys, (p, math.inf))

    def insert(self, record: Record) -> None:
        """
        Insert a record, keeping the index sorted by ``(p, seq)``.

        Parameters:
            record (Record): The record to insert. It is stored by reference.

        Raises:
            ValueError: If the record's key is NaN.
        """
        entry = Entry(self._make_key(record), record)
        key = entry.key
        keys = self._keys

        # Fast path: key sorts after everything stored so far
        if not keys or key > keys[-1]:
            self._entries.append(entry)
            keys.append(key)
            return

        i = bisect_left(keys, key)
        self._entries.insert(i, entry)
        keys.insert(i, key)

    def bulk_insert(self, records: Iterable[Record]) -> None:
        """
        Insert many records at once.

        The final order is identical to inserting each record with
        :meth:`insert` in iteration order: sequence ids are assigned in that
        order, the batch is sorted and then merged in one linear pass instead
        of paying a shift per record.
        """
        batch = [Entry(self._make_key(record), record) for record in records]
        if not batch:
            return
        batch.sort(key=_entry_key)

        if not self._entries or batch[0].key > self._keys[-1]:
            self._entries.extend(batch)
            self._keys.extend(entry.key for entry in batch)
            return

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Merging %d new entries into %d existing", len(batch), len(self._entries))
        self._entries = list(merge(self._entries, batch, key=_entry_key))
        self._keys = [entry.key for entry in self._entries]

    def get(self, p: float) -> Optional[Record]:
        """
        Return the earliest inserted record whose key equals ``p``.

        Returns:
            Optional[Record]: The record, or None if no record has key ``p``.
        """
        i = self._lower_bound(p)
        if i < len(self._entries) and self._entries[i].p == p:
            return self._entries[i].record
        return None

    def get_range(self, lo: float, hi: float, include_high: bool = False) -> List[Record]:
        """
        Return records with ``lo <= p < hi`` (or ``lo <= p <= hi`` when
        ``include_high`` is set) in ascending key order.

        Both boundaries are searched independently on ``p`` alone. An empty
        or inverted interval, or a NaN bound, yields an empty list.
        """
        if lo > hi or lo != lo or hi != hi:
            return []
        start = self._lower_bound(lo)
        end = self._upper_bound(hi) if include_high else self._lower_bound(hi)
        return [entry.record for entry in self._entries[start:end]]

    def delete(self, p: float) -> Optional[Record]:
        """
        Remove and return the record :meth:`get` would return for ``p``.

        Returns:
            Optional[Record]: The removed record, or None if nothing matched.
        """
        i = self._lower_bound(p)
        if i < len(self._entries) and self._entries[i].p == p:
            entry = self._entries.pop(i)
            del self._keys[i]
            return entry.record
        return None

    def count(self) -> int:
        """Returns the number of stored records in O(1) time."""
        return len(self._keys)

    def entries(self) -> Iterator[Tuple[Key, Record]]:
        """Iterate ``(key, record)`` pairs in key order."""
        for entry in self._entries:
            yield entry.key, entry.record

    def check_invariant(self) -> None:
        """
        Verifies that:
          1) Keys are strictly ascending by ``(p, seq)``.
          2) The key array and the entry array agree.
          3) Every key's ``p`` is what the extractor yields for its record.

        Raises:
            InvariantError: if any of these conditions fails.
        """
        if len(self._keys) != len(self._entries):
            raise InvariantError(
                f"Invariant failed: {len(self._keys)} keys for {len(self._entries)} entries"
            )
        for i, (key, entry) in enumerate(zip(self._keys, self._entries)):
            if key != entry.key:
                raise InvariantError(f"Invariant failed: key #{i} {key!r} != entry key {entry.key!r}")
        check_index(self)
