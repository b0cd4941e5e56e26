"""Protocol definitions for SSTable scanning."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from ..core.types import Partition


class Scanner(Protocol):
    """Sequential, forward-only scanner over the partitions of one SSTable."""

    def __iter__(self) -> Iterator[Partition]:
        """Yield partitions one at a time until the file is exhausted."""
        ...

    def close(self) -> None:
        """Release file handles / child processes."""
        ...

    def __enter__(self) -> Scanner:
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        ...


class ScannerBackend(Protocol):
    """Decodes SSTable data files into partitions."""

    def open_scanner(self, data_file: Path) -> Scanner:
        """Open a scanner; raise UnsupportedFormatError for pre-3.0 files."""
        ...
