"""Shared primitives for sample records and index entries."""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

# A sample record: ``{"p": float}`` plus arbitrary passthrough fields.
Record = Mapping[str, Any]

# Composite ordering key ``(p, sequence_id)``.
Key = Tuple[float, int]


def by_p(record: Record) -> float:
    """Default key extractor: the record's ``p`` field."""
    return record["p"]


def make_records(values) -> list[dict]:
    """Wrap raw key values into fresh ``{"p": value}`` records."""
    return [{"p": value} for value in values]


@dataclass(frozen=True)
class Entry:
    """
    Represents an entry in the OrderedIndex.

    Attributes:
        key (Key): ``(p, sequence_id)``; the sequence id is unique per index,
            so no two entries of one index share a key.
        record (Record): The stored record, returned as-is by lookups.
    """
    __slots__ = ("key", "record")

    key: Key
    record: Record

    @property
    def p(self) -> float:
        return self.key[0]
