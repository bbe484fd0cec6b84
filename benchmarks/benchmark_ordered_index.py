"""
ASV benchmarks for OrderedIndex operations.

Covers construction by single inserts versus bulk insert, point lookups,
range queries and deletes over several key distributions. The
sortedcontainers-based structure is measured alongside as a reference.
"""

import gc
from operator import attrgetter

from sortedcontainers import SortedKeyList

from sample_bench.base import Entry
from sample_bench.ordered_index import OrderedIndex
from benchmarks.benchmark_utils import BaseBenchmark, BenchmarkUtils, DISTRIBUTIONS

SIZES = [1000, 10000, 100000]


def _seed_for(size, distribution):
    return 42 + SIZES.index(size) * 10 + DISTRIBUTIONS.index(distribution)


class OrderedIndexInsertBenchmarks(BaseBenchmark):
    """Benchmarks for OrderedIndex construction."""

    params = [SIZES, list(DISTRIBUTIONS)]
    param_names = ['size', 'distribution']

    min_run_count = 3

    def setup(self, size, distribution):
        super().setup(size, distribution)
        keys = BenchmarkUtils.generate_deterministic_keys(
            size=size, seed=_seed_for(size, distribution), distribution=distribution
        )
        self.records = BenchmarkUtils.create_test_records(keys)
        gc.collect()
        gc.disable()  # Enabled in teardown

    def time_insert_sequential(self, size, distribution):
        """Build by one insert() per record."""
        index = OrderedIndex()
        insert = index.insert
        for record in self.records:
            insert(record)

    def time_bulk_insert(self, size, distribution):
        """Build with a single bulk_insert()."""
        index = OrderedIndex()
        index.bulk_insert(self.records)

    def time_sorted_key_list_add(self, size, distribution):
        """Reference: SortedKeyList built by one add() per record."""
        container = SortedKeyList(key=attrgetter("key"))
        add = container.add
        for seq, record in enumerate(self.records):
            add(Entry((record["p"], seq), record))


class OrderedIndexQueryBenchmarks(BaseBenchmark):
    """Benchmarks for get() and get_range() on a populated index."""

    params = [SIZES, [0.0, 1.0]]
    param_names = ['size', 'hit_ratio']

    min_run_count = 5

    _index_cache = {}
    _keys_cache = {}

    def setup(self, size, hit_ratio):
        super().setup(size, hit_ratio)
        if size not in self._index_cache:
            keys = BenchmarkUtils.generate_deterministic_keys(
                size=size, seed=_seed_for(size, 'clustered'), distribution='clustered'
            )
            self._index_cache[size] = OrderedIndex(initial=BenchmarkUtils.create_test_records(keys))
            self._keys_cache[size] = keys

        self.index = self._index_cache[size]
        self.lookup_keys = BenchmarkUtils.create_lookup_keys(
            insert_keys=self._keys_cache[size],
            hit_ratio=hit_ratio,
            seed=_seed_for(size, 'clustered') + 1000,
        )
        gc.collect()
        gc.disable()  # Enabled in teardown

    def time_get_sequential(self, size, hit_ratio):
        get = self.index.get
        for p in self.lookup_keys:
            get(p)

    def time_get_range_inclusive(self, size, hit_ratio):
        self.index.get_range(4, 6, include_high=True)

    def time_get_range_narrow(self, size, hit_ratio):
        get_range = self.index.get_range
        for p in self.lookup_keys[:100]:
            get_range(p, p + 0.01)


class OrderedIndexDeleteBenchmarks(BaseBenchmark):
    """Benchmarks for delete(); the index is rebuilt before every sample."""

    params = [SIZES]
    param_names = ['size']

    number = 1
    repeat = 10

    def setup(self, size):
        super().setup(size)
        keys = BenchmarkUtils.generate_deterministic_keys(
            size=size, seed=_seed_for(size, 'duplicates'), distribution='duplicates'
        )
        self.index = OrderedIndex(initial=BenchmarkUtils.create_test_records(keys))
        self.delete_keys = keys[: min(1000, size)]
        gc.collect()
        gc.disable()  # Enabled in teardown

    def time_delete_sequential(self, size):
        delete = self.index.delete
        for p in self.delete_keys:
            delete(p)
