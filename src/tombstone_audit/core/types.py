"""Common type definitions for the tombstone audit.

Read-only views of a decoded SSTable: partitions, rows, range markers and cells.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Union

# Sentinel values used by the storage engine for "not deleted"
NO_TIMESTAMP = -(2**63)
NO_DELETION_TIME = 2**31 - 1
NO_TTL = 0


@dataclass(frozen=True)
class DeletionTime:
    """Deletion marker of a partition, row or complex column."""

    marked_for_delete_at: int = NO_TIMESTAMP
    local_deletion_time: int = NO_DELETION_TIME

    def is_live(self) -> bool:
        return (
            self.marked_for_delete_at == NO_TIMESTAMP
            and self.local_deletion_time == NO_DELETION_TIME
        )


LIVE = DeletionTime()


@dataclass(frozen=True)
class LivenessInfo:
    """Primary key liveness of a row."""

    timestamp: int = NO_TIMESTAMP
    ttl: int = NO_TTL

    def is_expiring(self) -> bool:
        return self.ttl != NO_TTL


EMPTY_LIVENESS = LivenessInfo()


@dataclass(frozen=True)
class Cell:
    column: str
    is_tombstone: bool = False
    is_expiring: bool = False
    path: tuple = ()


@dataclass(frozen=True)
class ColumnDefinition:
    name: str
    is_complex: bool = False


@dataclass(frozen=True)
class ComplexColumnData:
    """Collection or UDT column data; carries its own deletion marker."""

    column: ColumnDefinition
    complex_deletion: DeletionTime = LIVE


@dataclass(frozen=True)
class Row:
    """A clustering row (or the static row) of a partition.

    Attributes:
        clustering: Clustering key values, empty for the static row
        deletion: Row-level deletion marker
        liveness: Primary key liveness info
        cells: Cells in column order
        columns: Column definitions present on the row
        complex_data: Complex column data, one per complex column
    """

    clustering: tuple = ()
    deletion: DeletionTime = LIVE
    liveness: LivenessInfo = EMPTY_LIVENESS
    cells: tuple[Cell, ...] = ()
    columns: tuple[ColumnDefinition, ...] = ()
    complex_data: tuple[ComplexColumnData, ...] = ()

    def has_complex_deletion(self) -> bool:
        return any(not ccd.complex_deletion.is_live() for ccd in self.complex_data)

    def get_complex_column_data(self, column: ColumnDefinition) -> ComplexColumnData | None:
        for ccd in self.complex_data:
            if ccd.column.name == column.name:
                return ccd
        return None


@dataclass(frozen=True)
class RangeMarker:
    """Range tombstone bound or boundary; its presence is one range tombstone."""

    kind: str = "range_tombstone_bound"
    clustering: tuple = ()


Unfiltered = Union[Row, RangeMarker]


class Partition:
    """One partition with a forward-only, single-pass entry stream.

    Args:
        key: Partition key values
        deletion: Partition-level deletion marker
        entries: Iterable of rows and range markers in clustering order
    """

    def __init__(
        self,
        key: tuple,
        deletion: DeletionTime = LIVE,
        entries: Iterable[Unfiltered] = (),
    ):
        self.key = key
        self.deletion = deletion
        self._entries: Iterator[Unfiltered] | None = iter(entries)

    def __iter__(self) -> Iterator[Unfiltered]:
        if self._entries is None:
            raise RuntimeError(f"Partition {self.key!r} has already been consumed")
        entries, self._entries = self._entries, None
        return entries

    def __repr__(self) -> str:
        return f"Partition(key={self.key!r}, deletion={self.deletion!r})"
