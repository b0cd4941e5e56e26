"""Tombstone Audit - count tombstones in Cassandra SSTable data files."""

from .core.audit import TombstoneAudit
from .core.config import AuditConfig
from .core.errors import (
    TombstoneAuditError,
    UnsupportedFormatError,
    ScannerError,
    InputDirectoryError,
    ReportExistsError,
    ReportWriteError,
    NoDataFilesError,
)
from .core.stats import Category, TombstoneStats, TombstoneSummary
from .core.types import (
    Cell,
    ColumnDefinition,
    ComplexColumnData,
    DeletionTime,
    LivenessInfo,
    Partition,
    RangeMarker,
    Row,
    Unfiltered,
)

__all__ = [
    "TombstoneAudit",
    "AuditConfig",
    "TombstoneAuditError",
    "UnsupportedFormatError",
    "ScannerError",
    "InputDirectoryError",
    "ReportExistsError",
    "ReportWriteError",
    "NoDataFilesError",
    "Category",
    "TombstoneStats",
    "TombstoneSummary",
    "Cell",
    "ColumnDefinition",
    "ComplexColumnData",
    "DeletionTime",
    "LivenessInfo",
    "Partition",
    "RangeMarker",
    "Row",
    "Unfiltered",
]
