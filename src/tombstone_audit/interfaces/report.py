"""Protocol definition for report output."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..core.stats import TombstoneSummary


class ReportListener(Protocol):
    """Receives audit events in file-processing order."""

    def run_started(self, data_dir: Path, data_files: list[Path]) -> None:
        """Called once before the first file is scanned."""
        ...

    def file_started(self, data_file: Path) -> None:
        """Called before a file is scanned."""
        ...

    def cells_counted(self, before: int, after: int) -> None:
        """Called while scanning as the file's cell count grows."""
        ...

    def file_failed(self, data_file: Path, error: BaseException) -> None:
        """Called when scanning a file fails."""
        ...

    def file_finished(self, data_file: Path, summary: TombstoneSummary) -> None:
        """Called when a file has been scanned without errors."""
        ...
