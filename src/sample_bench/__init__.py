"""
sample_bench: latency benchmark of storage backends on numeric samples.

Quick-start imports::

    from sample_bench import OrderedIndex, BenchmarkRunner, BenchmarkConfig

See ``sample_bench.backends`` for the backend protocol and registry.
"""

# Reference index
from sample_bench.base import Entry, Record
from sample_bench.ordered_index import OrderedIndex
from sample_bench.invariants import InvariantError

# Benchmark harness
from sample_bench.aggregate import ResultAggregator
from sample_bench.backends import StorageBackend, available_backends, create_backend
from sample_bench.config import BenchmarkConfig
from sample_bench.datagen import SampleGenerator
from sample_bench.runner import BenchmarkRunner, SizeResult
from sample_bench.timing import STAGES, StageTimer, TimingRecord

__version__ = "0.1.0"

__all__ = [
    # Reference index
    "Entry",
    "InvariantError",
    "OrderedIndex",
    "Record",
    # Benchmark harness
    "BenchmarkConfig",
    "BenchmarkRunner",
    "ResultAggregator",
    "STAGES",
    "SampleGenerator",
    "SizeResult",
    "StageTimer",
    "StorageBackend",
    "TimingRecord",
    "available_backends",
    "create_backend",
]
