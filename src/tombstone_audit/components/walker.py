"""Partition walker.

Consumes one partition's entries in order and accumulates them into a file's
TombstoneStats.
"""

from __future__ import annotations

from collections.abc import Callable

from ..core.stats import Category, TombstoneStats
from ..core.types import Partition
from .classifier import classify

# Called with the cell count before and after each classified row
CellProgress = Callable[[int, int], None]


class PartitionWalker:
    """Drive partitions through the classifier into a stats accumulator.

    Args:
        stats: Accumulator for the file being scanned
        on_cells: Optional progress hook, never affects the counters

    Invariants:
        - Entries are processed once each, in the order they are yielded
        - No entry is retained after it has been classified
    """

    def __init__(self, stats: TombstoneStats, on_cells: CellProgress | None = None):
        self.stats = stats
        self.on_cells = on_cells

    def walk(self, partition: Partition) -> None:
        """Consume one partition fully."""
        stats = self.stats
        stats.partition_count += 1

        if not partition.deletion.is_live():
            stats.add_tombstone(Category.PARTITION)

        for entry in partition:
            stats.row_count += 1

            classification = classify(entry)
            cells_before = stats.cell_count
            stats.add(classification)

            if self.on_cells is not None and classification.cells:
                self.on_cells(cells_before, stats.cell_count)
