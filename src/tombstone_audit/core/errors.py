"""Exception hierarchy for the tombstone audit.

Per-file errors are recovered by the aggregator; the rest abort the run.
"""

from __future__ import annotations


class TombstoneAuditError(Exception):
    """Base exception for all tombstone audit errors."""
    pass


class UnsupportedFormatError(TombstoneAuditError):
    """Raised when an SSTable predates the rows-as-first-class layout."""
    pass


class ScannerError(TombstoneAuditError):
    """Raised when an SSTable cannot be opened or decoded."""
    pass


class InputDirectoryError(TombstoneAuditError):
    """Raised when the table data directory is missing or not a directory."""
    pass


class ReportExistsError(TombstoneAuditError):
    """Raised when the report file already exists."""
    pass


class ReportWriteError(TombstoneAuditError):
    """Raised when the report file cannot be created or written."""
    pass


class NoDataFilesError(TombstoneAuditError):
    """Raised when the data directory holds no SSTable data files."""
    pass
