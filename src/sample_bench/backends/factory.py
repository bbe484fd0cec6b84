"""Backend registry and factory."""

from typing import Callable, Dict, List

from sample_bench.backends.base import StorageBackend
from sample_bench.backends.list_backend import ListBackend
from sample_bench.backends.ordered_index_backend import OrderedIndexBackend
from sample_bench.backends.sorted_list_backend import SortedListBackend
from sample_bench.backends.sqlite_backend import SqliteBackend

# Registration order is also the default run order
BACKENDS: Dict[str, Callable[[], StorageBackend]] = {
    ListBackend.name: ListBackend,
    SqliteBackend.name: SqliteBackend,
    SortedListBackend.name: SortedListBackend,
    OrderedIndexBackend.name: OrderedIndexBackend,
}


def available_backends() -> List[str]:
    """Names of all registered backends, in default run order."""
    return list(BACKENDS)


def create_backend(name: str) -> StorageBackend:
    """
    Create a fresh, unprepared backend by registry name.

    Raises:
        ValueError: If no backend is registered under ``name``.
    """
    try:
        factory = BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown backend {name!r}; choose from {', '.join(BACKENDS)}"
        ) from None
    return factory()
