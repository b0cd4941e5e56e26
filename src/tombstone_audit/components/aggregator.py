"""File aggregator.

Scans one SSTable data file end to end and turns the outcome, success or
failure, into a FileResult carrying the finalized counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.stats import TombstoneStats, TombstoneSummary
from .walker import CellProgress, PartitionWalker

if TYPE_CHECKING:
    from ..interfaces.scanner import ScannerBackend

logger = logging.getLogger(__name__)


class FileStatus(str, Enum):
    PENDING = "pending"
    SCANNING = "scanning"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class FileResult:
    """Outcome of scanning one data file.

    Attributes:
        data_file: Path of the SSTable data file
        status: COMPLETED or FAILED
        summary: Counts accumulated before the scan ended
        error: Failure that ended the scan, if any
    """

    data_file: Path
    status: FileStatus
    summary: TombstoneSummary
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is FileStatus.COMPLETED


class FileAggregator:
    """Scan data files one at a time with a scanner backend.

    Args:
        backend: Decodes data files into partitions
        on_cells: Optional progress hook passed to the partition walker

    Attributes:
        status: State of the file currently or most recently scanned

    Invariants:
        - Exactly one FileResult per scanned file
        - A failed file keeps the counts accumulated before the failure
    """

    def __init__(self, backend: ScannerBackend, on_cells: CellProgress | None = None):
        self.backend = backend
        self.on_cells = on_cells
        self.status = FileStatus.PENDING

    def scan(self, data_file: Path) -> FileResult:
        """Scan one file; never raises for per-file failures."""
        data_file = Path(data_file)
        self.status = FileStatus.PENDING
        stats = TombstoneStats()
        walker = PartitionWalker(stats, on_cells=self.on_cells)

        self.status = FileStatus.SCANNING

        try:
            with self.backend.open_scanner(data_file) as scanner:
                for partition in scanner:
                    walker.walk(partition)
        except Exception as e:
            self.status = FileStatus.FAILED
            logger.exception(f"Error processing SSTable file {data_file}")
            return FileResult(data_file, FileStatus.FAILED, stats.snapshot(), error=e)

        self.status = FileStatus.COMPLETED
        logger.info(
            f"Scanned {data_file.name}: {stats.partition_count} partitions, "
            f"{stats.row_count} rows, {stats.total_tombstones} tombstones"
        )
        return FileResult(data_file, FileStatus.COMPLETED, stats.snapshot())
