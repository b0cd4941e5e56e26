"""Per-file tombstone counters.

TombstoneStats is the mutable accumulator owned by the aggregator while a file
is scanned; TombstoneSummary is the immutable record handed to the report.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, fields
from enum import Enum


class Category(str, Enum):
    """Tombstone categories, valued by the counter attribute they feed."""

    PARTITION = "partition_tombstones"
    RANGE = "range_tombstones"
    COMPLEX_COLUMN = "complex_column_tombstones"
    ROW_DELETION = "row_deletion_tombstones"
    ROW_TTL = "row_ttl_tombstones"
    CELL_DELETION = "cell_deletion_tombstones"
    CELL_TTL = "cell_ttl_tombstones"


@dataclass(frozen=True)
class Classification:
    """Contribution of one row or range marker."""

    tombstones: Counter
    cells: int = 0


class _Totals:
    @property
    def total_tombstones(self) -> int:
        return sum(getattr(self, category.value) for category in Category)

    def as_dict(self) -> dict[str, int]:
        counts = asdict(self)
        counts["total_tombstones"] = self.total_tombstones
        return counts


@dataclass(frozen=True)
class TombstoneSummary(_Totals):
    """Finalized, immutable counts for one data file."""

    partition_count: int = 0
    row_count: int = 0
    cell_count: int = 0
    partition_tombstones: int = 0
    range_tombstones: int = 0
    complex_column_tombstones: int = 0
    row_deletion_tombstones: int = 0
    row_ttl_tombstones: int = 0
    cell_deletion_tombstones: int = 0
    cell_ttl_tombstones: int = 0


@dataclass
class TombstoneStats(_Totals):
    """Mutable accumulator for one data file.

    Invariants:
        - Counters only ever grow
        - total_tombstones is always the sum of the category counters
    """

    partition_count: int = 0
    row_count: int = 0
    cell_count: int = 0
    partition_tombstones: int = 0
    range_tombstones: int = 0
    complex_column_tombstones: int = 0
    row_deletion_tombstones: int = 0
    row_ttl_tombstones: int = 0
    cell_deletion_tombstones: int = 0
    cell_ttl_tombstones: int = 0

    def add_tombstone(self, category: Category, count: int = 1) -> None:
        if count < 0:
            raise ValueError(f"Tombstone counts cannot decrease: {category.value} += {count}")
        setattr(self, category.value, getattr(self, category.value) + count)

    def add(self, classification: Classification) -> None:
        """Accumulate the contribution of one classified entry."""
        self.cell_count += classification.cells
        for category, count in classification.tombstones.items():
            self.add_tombstone(category, count)

    def snapshot(self) -> TombstoneSummary:
        return TombstoneSummary(**{f.name: getattr(self, f.name) for f in fields(self)})
