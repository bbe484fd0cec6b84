"""
Benchmarks package for the ordered index.

This package contains ASV benchmarks for performance testing of:
- OrderedIndex construction (single inserts, bulk insert)
- Point lookups and range queries
- Deletes on duplicate-heavy data

The full backend comparison lives in ``sample_bench.runner``; these
benchmarks isolate the index itself using deterministic test data.
"""

from .benchmark_utils import BaseBenchmark, BenchmarkUtils

__all__ = ["BaseBenchmark", "BenchmarkUtils"]
