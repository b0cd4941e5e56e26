"""Report emitter.

Writes one CSV line per scanned data file and, optionally, human-readable
progress to the console.
"""

from __future__ import annotations

import csv
import logging
import sys
from pathlib import Path
from typing import IO

from ..core.errors import ReportExistsError, ReportWriteError
from ..core.stats import TombstoneSummary

logger = logging.getLogger(__name__)

HEADER = [
    "sstable_data_file",
    "part_cnt",
    "row_cnt",
    "total_ts_cnt",
    "ts_part_cnt",
    "ts_range_cnt",
    "ts_complexcol_cnt",
    "ts_row_del_cnt",
    "ts_row_ttl_cnt",
    "ts_cell_del_cnt",
    "ts_cell_ttl_cnt",
]


def report_row(file_name: str, summary: TombstoneSummary) -> list:
    """Fields of one report line, in header order."""
    return [
        file_name,
        summary.partition_count,
        summary.row_count,
        summary.total_tombstones,
        summary.partition_tombstones,
        summary.range_tombstones,
        summary.complex_column_tombstones,
        summary.row_deletion_tombstones,
        summary.row_ttl_tombstones,
        summary.cell_deletion_tombstones,
        summary.cell_ttl_tombstones,
    ]


class CsvReport:
    """CSV report file, created exclusively with its header line.

    Args:
        path: Report path; must not exist yet

    Raises:
        ReportExistsError: If the path already exists
        ReportWriteError: If the file cannot be created or written
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        try:
            self._fd = open(self.path, "x", newline="", encoding="utf-8")
        except FileExistsError as e:
            raise ReportExistsError(f"Report file already exists: {self.path}") from e
        except OSError as e:
            raise ReportWriteError(f"Failed to create report file {self.path}: {e}") from e

        self._writer = csv.writer(self._fd, lineterminator="\n")
        self.rows_written = 0
        try:
            self._write(HEADER)
        except ReportWriteError:
            self.close()
            raise
        logger.debug(f"Created report {self.path}")

    def _write(self, fields: list) -> None:
        try:
            self._writer.writerow(fields)
            self._fd.flush()
        except OSError as e:
            raise ReportWriteError(f"Failed to write report file {self.path}: {e}") from e

    def write(self, file_name: str, summary: TombstoneSummary) -> None:
        """Append the line for one data file."""
        self._write(report_row(file_name, summary))
        self.rows_written += 1

    def close(self) -> None:
        if self._fd:
            self._fd.close()
            self._fd = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class ConsoleProgress:
    """Human-readable progress: banners, cell dots and per-file summaries.

    Args:
        stream: Text stream to write to (stdout by default)
        every_cells: Print one dot per this many cells
    """

    def __init__(self, stream: IO[str] | None = None, every_cells: int = 100):
        self.stream = stream if stream is not None else sys.stdout
        self.every_cells = every_cells

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def run_started(self, data_dir: Path, data_files: list[Path]) -> None:
        self._print(f"\nProcessing SSTable data files under directory: {data_dir}")

    def file_started(self, data_file: Path) -> None:
        self._print(f"\n   Analyzing SSTable File: {data_file.name}")

    def cells_counted(self, before: int, after: int) -> None:
        n = self.every_cells
        for mark in range((before // n + 1) * n, after + 1, n):
            if mark == n:
                self.stream.write("   ")
            self.stream.write(".")
        self.stream.flush()

    def file_failed(self, data_file: Path, error: BaseException) -> None:
        self._print(f"Error processing SSTable file: {data_file}")
        self._print(f"   {type(error).__name__}: {error}")

    def file_finished(self, data_file: Path, summary: TombstoneSummary) -> None:
        if summary.cell_count > self.every_cells:
            self._print()

        self._print(
            f"      Total partition/row count: {summary.partition_count}/{summary.row_count}"
        )
        self._print(f"      Tombstone Count (Total): {summary.total_tombstones}")
        self._print(f"      Tombstone Count (Partition): {summary.partition_tombstones}")
        self._print(f"      Tombstone Count (Range): {summary.range_tombstones}")
        self._print(f"      Tombstone Count (ComplexColumn): {summary.complex_column_tombstones}")
        self._print(f"      Tombstone Count (Row) - Deletion: {summary.row_deletion_tombstones}")
        self._print(f"      Tombstone Count (Row) - TTL: {summary.row_ttl_tombstones}")
        self._print(f"      Tombstone Count (Cell) - Deletion: {summary.cell_deletion_tombstones}")
        self._print(f"      Tombstone Count (Cell) - TTL: {summary.cell_ttl_tombstones}")
