"""Storage backend implementations."""

from sample_bench.backends.base import StorageBackend
from sample_bench.backends.factory import BACKENDS, available_backends, create_backend
from sample_bench.backends.list_backend import ListBackend
from sample_bench.backends.ordered_index_backend import OrderedIndexBackend
from sample_bench.backends.sorted_list_backend import SortedListBackend
from sample_bench.backends.sqlite_backend import SqliteBackend

__all__ = [
    "BACKENDS",
    "ListBackend",
    "OrderedIndexBackend",
    "SortedListBackend",
    "SqliteBackend",
    "StorageBackend",
    "available_backends",
    "create_backend",
]
