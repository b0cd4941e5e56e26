"""Unit tests for tombstone counters."""

from collections import Counter
from dataclasses import FrozenInstanceError

import pytest

from tombstone_audit.core.stats import Category, Classification, TombstoneStats


def test_total_is_sum_of_categories():
    """total_tombstones is derived from the category counters."""
    stats = TombstoneStats()
    for i, category in enumerate(Category, start=1):
        stats.add_tombstone(category, i)

    assert stats.total_tombstones == sum(range(1, len(Category) + 1))
    assert stats.total_tombstones == sum(getattr(stats, c.value) for c in Category)


def test_add_classification():
    stats = TombstoneStats()
    stats.add(Classification(Counter({Category.CELL_TTL: 2, Category.ROW_TTL: 1}), cells=4))
    stats.add(Classification(Counter({Category.CELL_TTL: 1}), cells=1))

    assert stats.cell_ttl_tombstones == 3
    assert stats.row_ttl_tombstones == 1
    assert stats.cell_count == 5
    assert stats.total_tombstones == 4


def test_counters_never_decrease():
    stats = TombstoneStats()
    with pytest.raises(ValueError):
        stats.add_tombstone(Category.RANGE, -1)


def test_snapshot_is_immutable_copy():
    """Snapshots freeze the counts at the time they are taken."""
    stats = TombstoneStats(partition_count=2, row_count=5)
    stats.add_tombstone(Category.PARTITION)

    summary = stats.snapshot()
    stats.add_tombstone(Category.PARTITION)

    assert summary.partition_count == 2
    assert summary.partition_tombstones == 1
    assert summary.total_tombstones == 1
    with pytest.raises(FrozenInstanceError):
        summary.row_count = 10


def test_as_dict_includes_total():
    stats = TombstoneStats()
    stats.add_tombstone(Category.CELL_DELETION, 3)

    counts = stats.snapshot().as_dict()

    assert counts["cell_deletion_tombstones"] == 3
    assert counts["total_tombstones"] == 3
    assert counts["partition_count"] == 0
