"""Tombstone audit run - main public API.

Orchestrates data file discovery, the file aggregator and the report.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..components.aggregator import FileAggregator, FileResult
from ..components.dump_scanner import SSTableDumpBackend
from ..components.report import ConsoleProgress, CsvReport
from ..interfaces.report import ReportListener
from ..interfaces.scanner import ScannerBackend
from .config import AuditConfig
from .errors import InputDirectoryError, NoDataFilesError

logger = logging.getLogger(__name__)


class TombstoneAudit:
    """Count tombstones in every SSTable data file of a table directory.

    Args:
        config: Audit configuration
        backend: Scanner backend; defaults to running sstabledump
        listener: Progress listener; defaults to console output when enabled

    Public API:
        - find_data_files(): Sorted data files of the directory
        - run(): Scan every data file and write the report

    Invariants:
        - Files are scanned sequentially, one report line each
        - Per-file failures never abort the run
    """

    def __init__(
        self,
        config: AuditConfig,
        backend: ScannerBackend | None = None,
        listener: ReportListener | None = None,
    ):
        self.config = config
        self.backend = backend if backend is not None else SSTableDumpBackend(config.sstabledump_command)
        if listener is None and config.show_progress:
            listener = ConsoleProgress(every_cells=config.progress_every_cells)
        self.listener = listener

    def find_data_files(self) -> list[Path]:
        data_dir = self.config.data_dir
        try:
            return sorted(
                p for p in data_dir.iterdir()
                if p.is_file() and p.name.endswith(self.config.data_file_suffix)
            )
        except OSError as e:
            raise InputDirectoryError(f"Cannot read Cassandra data folder {data_dir}: {e}") from e

    def run(self) -> list[FileResult]:
        """Scan all data files and write one report line per file.

        Raises:
            InputDirectoryError: If the data directory is missing or not a directory
            ReportExistsError: If the report file already exists
            ReportWriteError: If the report cannot be created or written
            NoDataFilesError: If the directory holds no data files
        """
        data_dir = self.config.data_dir
        if not data_dir.is_dir():
            raise InputDirectoryError(
                f"Specified Cassandra data folder neither exists, nor is a valid directory: {data_dir}"
            )

        with CsvReport(self.config.output_path) as report:
            data_files = self.find_data_files()
            if not data_files:
                raise NoDataFilesError(f"There are no SSTable files under {data_dir}")

            logger.info(f"Found {len(data_files)} SSTable data files under {data_dir}")
            listener = self.listener
            if listener is not None:
                listener.run_started(data_dir, data_files)

            aggregator = FileAggregator(
                self.backend,
                on_cells=listener.cells_counted if listener is not None else None,
            )

            results = []
            for data_file in data_files:
                if listener is not None:
                    listener.file_started(data_file)

                result = aggregator.scan(data_file)

                if listener is not None:
                    if result.ok:
                        listener.file_finished(data_file, result.summary)
                    else:
                        listener.file_failed(data_file, result.error)

                report.write(data_file.name, result.summary)
                results.append(result)

        failed = sum(1 for r in results if not r.ok)
        logger.info(f"Audit finished: {len(results)} files, {failed} failed")
        return results
