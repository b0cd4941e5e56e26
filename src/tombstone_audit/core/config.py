"""Configuration for the tombstone audit.

Built once by the CLI (or by tests) and passed into the core explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_REPORT_NAME = "tombstone_stats.csv"


@dataclass
class AuditConfig:
    """Configuration parameters for one audit run.

    Attributes:
        data_dir: Table data directory holding the SSTable files
        output_path: CSV report path, must not exist yet
        show_progress: Whether to write progress and summaries to the console
        progress_every_cells: Print one progress dot per this many cells
        data_file_suffix: File name suffix identifying SSTable data files
        sstabledump_command: Executable used by the sstabledump backend
    """

    data_dir: Path = field(default_factory=Path.cwd)
    output_path: Path = Path(DEFAULT_REPORT_NAME)
    show_progress: bool = True
    progress_every_cells: int = 100
    data_file_suffix: str = "Data.db"
    sstabledump_command: str = "sstabledump"

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        self.output_path = Path(self.output_path)
        if self.progress_every_cells < 1:
            raise ValueError(f"progress_every_cells must be positive: {self.progress_every_cells}")
