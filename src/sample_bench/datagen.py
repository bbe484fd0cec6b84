"""Synthetic sample data for the benchmark.

Seed sets are three normal clusters scaled by ``times``; the query point set
is one cluster around the middle of the value range. Draws outside
``[min_value, max_value]`` are dropped rather than clamped, so the returned
lists are usually a little shorter than requested.
"""

from typing import List, Optional, Tuple

import numpy as np

# (mean, std_dev, count per unit of `times`)
SEED_CLUSTERS: Tuple[Tuple[float, float, int], ...] = (
    (1.0, 1.0, 500),
    (5.0, 5.0, 200),
    (10.0, 1.0, 1000),
)
POINT_MEAN = 5.0
POINT_STD_DEV = 1.0


class SampleGenerator:
    """Deterministic sample generator owning its own random state."""

    def __init__(
        self,
        seed: Optional[int] = None,
        min_value: float = 0.0,
        max_value: float = 10.0,
        round_digits: Optional[int] = 4,
    ):
        if min_value > max_value:
            raise ValueError(f"min_value {min_value} exceeds max_value {max_value}")
        self.seed = seed
        self.min_value = min_value
        self.max_value = max_value
        self.round_digits = round_digits
        self.rng = np.random.default_rng(seed)

    def normal(self, mean: float, std_dev: float, size: int) -> List[float]:
        """
        Draw ``size`` values from N(mean, std_dev), keep those inside the
        configured bounds and round them.

        Returns:
            Plain Python floats, in draw order.
        """
        values = self.rng.normal(mean, std_dev, size)
        values = values[(values >= self.min_value) & (values <= self.max_value)]
        if self.round_digits is not None:
            values = np.round(values, self.round_digits)
        return values.tolist()

    def seeds(self, times: int) -> List[float]:
        """Seed values for one dataset size: all clusters, concatenated."""
        if times <= 0:
            raise ValueError(f"times must be positive, got {times}")
        values: List[float] = []
        for mean, std_dev, per_unit in SEED_CLUSTERS:
            values.extend(self.normal(mean, std_dev, per_unit * times))
        return values

    def points(self, count: int = 1000) -> List[float]:
        """Query points used by the insert, findOne and remove stages."""
        return self.normal(POINT_MEAN, POINT_STD_DEV, count)
