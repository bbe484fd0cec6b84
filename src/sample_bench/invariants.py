"""Shared invariant-checking utilities.

A broken ordering invalidates every number the benchmark produces, so these
checks raise instead of returning a flag. The runner never absorbs
:class:`InvariantError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence

from sample_bench.logging_config import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from sample_bench.ordered_index import OrderedIndex


class InvariantError(Exception):
    """Raised when an ordered container invariant is violated."""


def check_key_order(keys: Sequence[tuple[float, int]]) -> None:
    """Raise if *keys* are not strictly ascending by ``(p, seq)``.

    Equal ``p`` values must carry strictly increasing sequence ids, so the
    whole sequence is strictly ascending as tuples.
    """
    for i in range(1, len(keys)):
        k0 = keys[i - 1]
        k1 = keys[i]
        if not k0 < k1:
            raise InvariantError(
                f"Invariant failed: key #{i - 1} {k0!r} is not below key #{i} {k1!r}"
            )


def check_index(index: OrderedIndex) -> None:
    """Check ordering and bookkeeping of an :class:`OrderedIndex`."""
    keys = [key for key, _ in index.entries()]
    check_key_order(keys)

    if len(keys) != index.count():
        raise InvariantError(
            f"Invariant failed: count()={index.count()} but {len(keys)} entries are stored"
        )

    by = index.by
    for i, (key, record) in enumerate(index.entries()):
        if by(record) != key[0]:
            raise InvariantError(
                f"Invariant failed: entry #{i} is keyed {key[0]!r} "
                f"but its record yields {by(record)!r}"
            )


def check_ascending_records(records: Iterable[Mapping[str, Any]], field: str = "p") -> bool:
    """Return True if *records* are non-decreasing by *field*."""
    prev = None
    for record in records:
        value = record[field]
        if prev is not None and value < prev:
            logger.debug("Order break: %r follows %r", value, prev)
            return False
        prev = value
    return True
