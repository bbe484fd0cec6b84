"""Benchmark configuration."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from sample_bench.backends.factory import available_backends

DEFAULT_TIMES = [1, 5, 10, 50, 100, 300, 500, 700, 1000]
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class BenchmarkConfig:
    """Configuration for benchmark runs."""

    # Reproducibility
    seed: Optional[int] = 42

    # Workload
    times: List[int] = field(default_factory=lambda: list(DEFAULT_TIMES))
    backends: List[str] = field(default_factory=available_backends)
    point_count: int = 1000
    range_low: float = 4.0
    range_high: float = 6.0

    # Data generation
    min_value: float = 0.0
    max_value: float = 10.0
    round_digits: Optional[int] = 4

    # Execution control
    verify: bool = False
    collect_garbage: bool = True

    # Output
    log_level: str = "INFO"
    csv_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "BenchmarkConfig":
        """Create config from environment variables."""
        config = cls()
        if "SAMPLE_BENCH_SEED" in os.environ:
            config.seed = int(os.environ["SAMPLE_BENCH_SEED"])
        if "SAMPLE_BENCH_TIMES" in os.environ:
            config.times = [int(t) for t in _split_list(os.environ["SAMPLE_BENCH_TIMES"])]
        if "SAMPLE_BENCH_BACKENDS" in os.environ:
            config.backends = _split_list(os.environ["SAMPLE_BENCH_BACKENDS"])
        config.verify = os.environ.get("SAMPLE_BENCH_VERIFY", "").lower() == "true"
        config.log_level = os.environ.get("SAMPLE_BENCH_LOG_LEVEL", config.log_level)
        return config

    def validate(self) -> None:
        """
        Reject configurations that cannot produce a meaningful run.

        Raises:
            ValueError: On unknown backends, empty or non-positive sizes, an
                inverted query range, inverted value bounds or an unknown log
                level.
        """
        if not self.times:
            raise ValueError("At least one dataset size (times) is required")
        for times in self.times:
            if times <= 0:
                raise ValueError(f"Dataset size multipliers must be positive, got {times}")
        if not self.backends:
            raise ValueError("At least one backend is required")
        known = available_backends()
        for name in self.backends:
            if name not in known:
                raise ValueError(f"Unknown backend {name!r}; choose from {', '.join(known)}")
        if self.point_count <= 0:
            raise ValueError(f"point_count must be positive, got {self.point_count}")
        if self.range_low > self.range_high:
            raise ValueError(
                f"Query range is inverted: {self.range_low} > {self.range_high}"
            )
        if self.min_value > self.max_value:
            raise ValueError(
                f"Value bounds are inverted: {self.min_value} > {self.max_value}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {self.log_level!r}; choose from {', '.join(LOG_LEVELS)}"
            )

    def __str__(self) -> str:
        """Format configuration as string."""
        lines = [
            f"Seed: {self.seed}",
            f"Sizes (times): {', '.join(str(t) for t in self.times)}",
            f"Backends: {', '.join(self.backends)}",
            f"Query points: {self.point_count}",
            f"Range query: [{self.range_low}, {self.range_high}]",
            f"Value bounds: [{self.min_value}, {self.max_value}]",
        ]
        return "\n".join(lines)
