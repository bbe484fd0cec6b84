"""Core benchmark runner: drives backends through the fixed stage sequence."""

import gc
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from tqdm import tqdm

from sample_bench.aggregate import ResultAggregator
from sample_bench.backends.base import StorageBackend
from sample_bench.backends.factory import create_backend
from sample_bench.base import make_records
from sample_bench.config import BenchmarkConfig
from sample_bench.datagen import SampleGenerator
from sample_bench.invariants import InvariantError
from sample_bench.logging_config import get_logger
from sample_bench.timing import StageTimer, TimingRecord

logger = get_logger("Runner")


@dataclass
class SizeResult:
    """All backend records for one dataset size."""
    times: int
    seed_count: int
    records: List[TimingRecord] = field(default_factory=list)


class BenchmarkRunner:
    """
    Runs backends through the benchmark with proper phase separation.

    Per backend pass:
    1. prepare (timed)
    2. bulk insert of the seed set (timed)
    3. insert, findOne, remove over the point set, one call per point
       (each stage timed as a whole)
    4. one inclusive range query (timed)
    5. verify (not timed, only when ``config.verify`` is set)

    Backends run strictly one after another. A failing backend is logged
    and reduced to a name-only record; the others still run.
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        backend_factory: Callable[[str], StorageBackend] = create_backend,
        generator: Optional[SampleGenerator] = None,
    ):
        """
        Initialize benchmark runner.

        Args:
            config: Benchmark configuration
            backend_factory: Builds a fresh backend for a registry name
            generator: Sample source; built from ``config`` when omitted
        """
        self.config = config
        self.backend_factory = backend_factory
        self.generator = generator or SampleGenerator(
            seed=config.seed,
            min_value=config.min_value,
            max_value=config.max_value,
            round_digits=config.round_digits,
        )
        self._points: Optional[List[float]] = None
        self._check_logging_level()

    def _check_logging_level(self) -> None:
        """Warn if verbose logging is enabled during measurement."""
        current_level = logging.getLogger("sample_bench").getEffectiveLevel()
        if current_level < logging.INFO:
            logger.warning(
                "Verbose logging (%s) is enabled. This may affect benchmark timing! "
                "Set log level to INFO or higher for accurate measurements.",
                logging.getLevelName(current_level),
            )

    @property
    def points(self) -> List[float]:
        """Query point set, generated once and shared by every size."""
        if self._points is None:
            self._points = self.generator.points(self.config.point_count)
        return self._points

    def _verify(self, backend: StorageBackend, stage: str) -> None:
        check = getattr(backend, "check_invariant", None)
        if check is None:
            return
        try:
            check()
        except InvariantError:
            logger.error("Invariant check failed for %s after %s", backend.name, stage)
            raise

    async def run_pass(
        self,
        backend: StorageBackend,
        seeds: Sequence[float],
        points: Sequence[float],
    ) -> TimingRecord:
        """
        Run one backend through the full stage sequence.

        Returns:
            The pass's TimingRecord; name-only if any stage raised.

        Raises:
            InvariantError: Propagated untouched; a broken container
                invalidates the whole run, not just this backend's row.
        """
        record = TimingRecord(backend.name)
        timer = StageTimer(backend, record)
        lo, hi = self.config.range_low, self.config.range_high
        logger.info("===== %s =====", backend.name)

        async def bulk():
            await backend.bulk_insert(make_records(seeds))

        async def insert_all():
            for p in points:
                await backend.insert({"p": p})

        async def find_all():
            hits = 0
            for p in points:
                if await backend.find_one(p) is not None:
                    hits += 1
            return hits

        async def query_range():
            return await backend.range(lo, hi)

        async def remove_all():
            for p in points:
                await backend.remove(p)

        stages = (
            ("prepare()", backend.prepare, None),
            ("bulk()", bulk, None),
            ("insert()", insert_all, None),
            ("findOne()", find_all, lambda hits: f"hits: {hits}/{len(points)}"),
            ("range()", query_range, _describe_range),
            ("remove()", remove_all, None),
        )

        try:
            for stage, operation, describe in stages:
                await timer.measure(stage, operation, describe)
                if self.config.verify:
                    self._verify(backend, stage)
        except InvariantError:
            raise
        except Exception as e:
            logger.exception("Backend %s failed: %s", backend.name, e)
            record.degrade(f"{type(e).__name__}: {e}")
        finally:
            try:
                await backend.close()
            except Exception as e:
                logger.warning("Closing backend %s failed: %s", backend.name, e)

        return record

    async def run_size(self, times: int) -> SizeResult:
        """
        Generate the seed set for ``times`` and run every configured backend.

        Each backend gets a fresh instance; nothing is reused across sizes.
        """
        seeds = self.generator.seeds(times)
        points = self.points
        logger.info("times=%d seeds=%d points=%d", times, len(seeds), len(points))

        result = SizeResult(times=times, seed_count=len(seeds))
        for name in self.config.backends:
            try:
                backend = self.backend_factory(name)
            except Exception as e:
                logger.exception("Could not create backend %s: %s", name, e)
                failed = TimingRecord(name)
                failed.degrade(f"{type(e).__name__}: {e}")
                result.records.append(failed)
                continue

            if self.config.collect_garbage:
                gc.collect()
            result.records.append(await self.run_pass(backend, seeds, points))
        return result

    async def run(self, times_list: Optional[Sequence[int]] = None, progress: bool = True) -> ResultAggregator:
        """
        Run every dataset size in turn and collect the results.

        Args:
            times_list: Size multipliers; defaults to ``config.times``
            progress: Show a tqdm progress bar over sizes

        Returns:
            ResultAggregator holding one entry per size
        """
        if times_list is None:
            times_list = self.config.times

        aggregator = ResultAggregator()
        for times in tqdm(times_list, desc="Dataset sizes", unit="size", disable=not progress):
            result = await self.run_size(times)
            aggregator.add(result.seed_count, result.records)
            aggregator.log_records(result.seed_count, result.records)
        return aggregator


def _describe_range(results) -> str:
    sample = json.dumps(results[0]) if results else None
    return f"len: {len(results)} sample: {sample}"
