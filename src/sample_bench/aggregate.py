"""Collects timing records across dataset sizes and reshapes them for reports."""

import csv
from typing import Any, Dict, List, Optional, Sequence, TextIO, Tuple

from sample_bench.logging_config import get_logger
from sample_bench.timing import STAGES, TimingRecord

logger = get_logger("Aggregate")

# stage -> backend name -> one value per size (None where missing)
StageTable = Dict[str, Dict[str, List[Optional[float]]]]


class ResultAggregator:
    """
    Accumulates per-size TimingRecords.

    Records are taken over as handed in and never modified here.
    """

    def __init__(self):
        self._results: List[Tuple[int, List[TimingRecord]]] = []

    def __len__(self) -> int:
        return len(self._results)

    def add(self, seed_count: int, records: Sequence[TimingRecord]) -> None:
        """Add the records of one dataset size (``seed_count`` records seeded)."""
        self._results.append((seed_count, list(records)))

    @property
    def sizes(self) -> List[int]:
        return [seed_count for seed_count, _ in self._results]

    @property
    def backend_names(self) -> List[str]:
        """Backend names in order of first appearance."""
        names: List[str] = []
        for _, records in self._results:
            for record in records:
                if record.name not in names:
                    names.append(record.name)
        return names

    @property
    def stages(self) -> List[str]:
        """Stage columns, taken from the first complete record."""
        for _, records in self._results:
            for record in records:
                if not record.failed and record.stages:
                    return list(record.stages)
        return list(STAGES)

    def table_by_stage(self) -> StageTable:
        """
        Reshape into ``{stage: {backend: [ms per size]}}``.

        A backend that failed, or did not run at some size, gets ``None``
        in that column.
        """
        names = self.backend_names
        stages = self.stages
        table: StageTable = {stage: {name: [] for name in names} for stage in stages}

        for _, records in self._results:
            by_name = {record.name: record for record in records}
            for stage in stages:
                for name in names:
                    record = by_name.get(name)
                    table[stage][name].append(None if record is None else record.elapsed(stage))
        return table

    def header(self) -> List[Any]:
        return ["class"] + self.sizes

    def csv_rows(self, stage: str, table: Optional[StageTable] = None) -> List[List[Any]]:
        """Header plus one row per backend for ``stage``; empty cells for gaps."""
        if table is None:
            table = self.table_by_stage()
        rows: List[List[Any]] = [self.header()]
        for name, values in table[stage].items():
            rows.append([name] + ["" if value is None else value for value in values])
        return rows

    def write_csv(self, stream: TextIO) -> None:
        """Write every stage table, each preceded by a ``==== stage ====`` line."""
        table = self.table_by_stage()
        writer = csv.writer(stream, lineterminator="\n")
        for stage in table:
            writer.writerow([f"==== {stage} ===="])
            writer.writerows(self.csv_rows(stage, table))

    @staticmethod
    def log_records(seed_count: int, records: Sequence[TimingRecord]) -> None:
        """Log one size's records as a backend x stage table."""
        header = f"{'Backend':<16}" + "".join(f"{stage:>13}" for stage in STAGES)
        sep = "-" * len(header)

        logger.info("")
        logger.info("=== RESULTS (seeds=%d) ===", seed_count)
        logger.info(header)
        logger.info(sep)
        for record in records:
            if record.failed:
                logger.info(f"{record.name:<16}  failed: {record.error}")
                continue
            cells = []
            for stage in STAGES:
                elapsed = record.elapsed(stage)
                cells.append(f"{'-':>13}" if elapsed is None else f"{elapsed:13.3f}")
            logger.info(f"{record.name:<16}" + "".join(cells))
        logger.info(sep)

    def log_tables(self) -> None:
        """Log every stage table (ms per dataset size) in CSV form."""
        table = self.table_by_stage()
        for stage in table:
            logger.info("==== %s ====", stage)
            for row in self.csv_rows(stage, table):
                logger.info(",".join(_format_cell(cell) for cell in row))


def _format_cell(cell: Any) -> str:
    if isinstance(cell, float):
        return f"{cell:.3f}"
    return str(cell)
