"""
Benchmarking utilities for the ordered index micro-benchmarks.

This module provides common utilities and base classes for ASV benchmarking
that work with ASV's built-in timing and stabilization mechanisms.

Reproducibility:
    All random data generation uses deterministic seeds by default.
    The default seed can be overridden via the BENCHMARK_SEED environment variable.

Logging:
    Benchmarks should be run with logging at INFO level or higher to avoid
    performance contamination from verbose debug output.
"""

import gc
import logging
import os
import random
from typing import List, Optional, Tuple

import numpy as np

from sample_bench.base import make_records

# Default seed for deterministic benchmarking - can be overridden via environment variable
DEFAULT_BENCHMARK_SEED = int(os.environ.get('BENCHMARK_SEED', '42'))

DISTRIBUTIONS = ('uniform', 'clustered', 'sequential', 'duplicates')


class BenchmarkUtils:
    """Utility class for ASV benchmarking operations.

    Generates deterministic sample keys and records so repeated runs
    measure the same workload.
    """

    @staticmethod
    def check_logging_level():
        """
        Raise if DEBUG (or more verbose) logging is enabled for sample_bench,
        as it contaminates benchmark results with I/O overhead.
        """
        effective_level = logging.getLogger("sample_bench").getEffectiveLevel()
        if effective_level <= logging.DEBUG:
            raise ValueError(
                f"Logging level is set to {logging.getLevelName(effective_level)}. "
                "Benchmarks require logging to be at INFO level or higher to avoid "
                "performance contamination from verbose debug output."
            )

    @staticmethod
    def generate_deterministic_keys(size: int,
                                    seed: Optional[int] = None,
                                    key_range: Tuple[float, float] = (0.0, 10.0),
                                    distribution: str = 'uniform') -> List[float]:
        """
        Generate deterministic sample keys.

        Args:
            size: Number of keys to generate
            seed: Random seed for reproducibility. If None, uses DEFAULT_BENCHMARK_SEED.
            key_range: Range of key values (min, max)
            distribution: One of 'uniform', 'clustered', 'sequential', 'duplicates'

        Returns:
            List of keys rounded to 4 decimals, in generation (not sorted) order
        """
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED
        rng = np.random.default_rng(seed)
        min_key, max_key = key_range

        if distribution == 'uniform':
            keys = rng.uniform(min_key, max_key, size)
        elif distribution == 'clustered':
            # A few hot spots, like the seed clusters of the full benchmark
            centers = rng.choice(np.linspace(min_key, max_key, 5), size=size)
            keys = np.clip(rng.normal(centers, (max_key - min_key) / 20), min_key, max_key)
        elif distribution == 'sequential':
            keys = np.linspace(min_key, max_key, size)
        elif distribution == 'duplicates':
            # Only ~size/10 distinct values, each repeated
            distinct = rng.uniform(min_key, max_key, max(1, size // 10))
            keys = rng.choice(distinct, size=size)
        else:
            raise ValueError(f"Unknown distribution: {distribution}")

        return np.round(keys, 4).tolist()

    @staticmethod
    def create_test_records(keys: List[float]) -> List[dict]:
        """Create ``{"p": key}`` records from a list of keys."""
        return make_records(keys)

    @staticmethod
    def create_lookup_keys(insert_keys: List[float],
                           hit_ratio: float = 0.8,
                           seed: Optional[int] = None,
                           num_lookups: int = 1000) -> List[float]:
        """
        Create keys for lookup operations with specified hit ratio.

        Misses are drawn at a fifth decimal so they can never collide with
        the 4-decimal inserted keys.
        """
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED
        rng = random.Random(seed)

        num_hits = int(num_lookups * hit_ratio) if insert_keys else 0
        num_misses = num_lookups - num_hits

        hit_keys = rng.choices(insert_keys, k=num_hits) if num_hits else []
        miss_keys = [round(rng.uniform(0.0, 10.0), 4) + 0.00005 for _ in range(num_misses)]

        lookup_keys = hit_keys + miss_keys
        rng.shuffle(lookup_keys)
        return lookup_keys


class BaseBenchmark:
    """Base class for ASV benchmarks.

    This class provides a standard setup/teardown pattern that ensures:
    - Logging level is appropriate for benchmarking
    - Garbage collection is re-enabled after each timed section

    Subclasses should:
    1. Call super().setup(*params) first
    2. Prepare test data
    3. Call gc.collect() then gc.disable() right before returning
    """

    params = []
    param_names = []

    warmup_time = 0.1
    sample_time = 0.4

    def setup(self, *params):
        BenchmarkUtils.check_logging_level()

    def teardown(self, *params):
        if not gc.isenabled():
            gc.enable()
