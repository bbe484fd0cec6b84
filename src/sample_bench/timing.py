"""Stage timing for benchmark passes."""

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Optional

from sample_bench.logging_config import get_logger

if TYPE_CHECKING:
    from sample_bench.backends.base import StorageBackend

logger = get_logger("Timing")

# Stage names in execution order
STAGES = ("prepare()", "bulk()", "insert()", "findOne()", "range()", "remove()")


@dataclass(frozen=True)
class StageTiming:
    """Elapsed time of one stage and the backend size right after it."""
    stage: str
    elapsed_ms: float
    size: int


@dataclass
class TimingRecord:
    """
    Timings collected for one backend during one pass.

    A failed pass keeps only its name (and the error text); timings taken
    before the failure are dropped so a partial pass never looks comparable
    to a complete one.
    """
    name: str
    stages: Dict[str, StageTiming] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def add(self, stage: str, elapsed_ms: float, size: int) -> None:
        self.stages[stage] = StageTiming(stage, elapsed_ms, size)

    def elapsed(self, stage: str) -> Optional[float]:
        timing = self.stages.get(stage)
        return None if timing is None else timing.elapsed_ms

    def final_size(self) -> Optional[int]:
        if not self.stages:
            return None
        return list(self.stages.values())[-1].size

    def degrade(self, error: str) -> None:
        """Drop all timings and mark the pass as failed."""
        self.stages.clear()
        self.error = error

    def as_row(self) -> Dict[str, Any]:
        """Flatten into ``{"name": ..., "<stage>": ms, ...}``."""
        row: Dict[str, Any] = {"name": self.name}
        for stage, timing in self.stages.items():
            row[stage] = timing.elapsed_ms
        return row


class StageTimer:
    """
    Times awaited stages of one backend and records them.

    Only the stage operation itself is inside the measured window; the size
    query and the log line that follow are not.
    """

    def __init__(self, backend: "StorageBackend", record: TimingRecord):
        self.backend = backend
        self.record = record

    async def measure(
        self,
        stage: str,
        operation: Callable[[], Awaitable[Any]],
        describe: Optional[Callable[[Any], str]] = None,
    ) -> Any:
        """
        Run ``operation`` to completion and store its elapsed time.

        Args:
            stage: Stage name, one of :data:`STAGES`
            operation: Zero-argument coroutine function performing the stage
            describe: Optional formatter for the stage result, appended to
                the log line

        Returns:
            Whatever ``operation`` returned
        """
        t0 = time.perf_counter()
        result = await operation()
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        size = await self.backend.size()
        self.record.add(stage, elapsed_ms, size)

        suffix = f" {describe(result)}" if describe is not None else ""
        logger.info(" - %s %.3f ms size: %d%s", stage, elapsed_ms, size, suffix)
        return result
