"""Unit tests for the row classifier."""

from collections import Counter

import pytest

from tombstone_audit.components.classifier import classify, classify_row
from tombstone_audit.core.stats import Category
from tombstone_audit.core.types import (
    Cell,
    ColumnDefinition,
    ComplexColumnData,
    DeletionTime,
    LivenessInfo,
    RangeMarker,
    Row,
)

DEAD = DeletionTime(marked_for_delete_at=1000, local_deletion_time=1)
TTL = LivenessInfo(timestamp=1000, ttl=3600)


def test_live_row_without_cells_contributes_nothing():
    """A live, non-expiring row with no cells has no tombstones."""
    result = classify(Row())

    assert result.tombstones == Counter()
    assert result.cells == 0


def test_range_marker_is_one_range_tombstone():
    """Each range marker counts exactly once."""
    result = classify(RangeMarker())

    assert result.tombstones == Counter({Category.RANGE: 1})
    assert result.cells == 0


def test_deleted_and_expiring_row_counts_both():
    """Row deletion and row TTL are independent."""
    result = classify_row(Row(deletion=DEAD, liveness=TTL))

    assert result.tombstones[Category.ROW_DELETION] == 1
    assert result.tombstones[Category.ROW_TTL] == 1
    assert sum(result.tombstones.values()) == 2


def test_cell_tombstone_and_cell_ttl():
    """Tombstone cell, expiring cell and plain cell on a non-expiring row."""
    row = Row(
        liveness=LivenessInfo(timestamp=1000),
        cells=(
            Cell("a", is_tombstone=True),
            Cell("b", is_expiring=True),
            Cell("c"),
        ),
    )

    result = classify_row(row)

    assert result.tombstones == Counter({Category.CELL_DELETION: 1, Category.CELL_TTL: 1})
    assert result.cells == 3


def test_expiring_row_absorbs_cell_ttl():
    """No cell of an expiring row counts as a cell TTL tombstone."""
    row = Row(
        liveness=TTL,
        cells=tuple(Cell(f"c{i}", is_expiring=True) for i in range(5)),
    )

    result = classify_row(row)

    assert result.tombstones[Category.CELL_TTL] == 0
    assert result.tombstones[Category.ROW_TTL] == 1
    assert result.cells == 5


def test_expiring_row_still_counts_cell_deletions():
    """Row TTL only suppresses cell TTL, not cell tombstones."""
    row = Row(liveness=TTL, cells=(Cell("a", is_tombstone=True, is_expiring=True),))

    result = classify_row(row)

    assert result.tombstones[Category.CELL_DELETION] == 1
    assert result.tombstones[Category.CELL_TTL] == 0


def test_complex_deletion_counted_once_per_column():
    """A deleted collection counts once regardless of how many cells it holds."""
    tags = ColumnDefinition("tags", is_complex=True)
    row = Row(
        cells=tuple(Cell("tags", path=(f"k{i}",)) for i in range(4)),
        columns=(ColumnDefinition("v"), tags),
        complex_data=(ComplexColumnData(tags, DEAD),),
    )

    result = classify_row(row)

    assert result.tombstones == Counter({Category.COMPLEX_COLUMN: 1})
    assert result.cells == 4


def test_complex_columns_counted_independently():
    """Only complex columns with a dead complex deletion count."""
    a = ColumnDefinition("a", is_complex=True)
    b = ColumnDefinition("b", is_complex=True)
    c = ColumnDefinition("c", is_complex=True)
    row = Row(
        columns=(a, b, c),
        complex_data=(
            ComplexColumnData(a, DEAD),
            ComplexColumnData(b),
            ComplexColumnData(c, DEAD),
        ),
    )

    result = classify_row(row)

    assert result.tombstones[Category.COMPLEX_COLUMN] == 2


def test_complex_column_without_data_is_skipped():
    """Complex columns with no complex data object are not visited."""
    a = ColumnDefinition("a", is_complex=True)
    missing = ColumnDefinition("missing", is_complex=True)
    row = Row(columns=(missing, a), complex_data=(ComplexColumnData(a, DEAD),))

    result = classify_row(row)

    assert result.tombstones[Category.COMPLEX_COLUMN] == 1


def test_complex_data_ignored_without_complex_deletion():
    """Live complex columns never contribute."""
    a = ColumnDefinition("a", is_complex=True)
    row = Row(columns=(a,), complex_data=(ComplexColumnData(a),))

    assert not row.has_complex_deletion()
    assert classify_row(row).tombstones == Counter()


def test_classify_is_pure():
    """Classifying the same row twice gives the same result."""
    row = Row(
        deletion=DEAD,
        cells=(Cell("a", is_tombstone=True), Cell("b", is_expiring=True)),
    )

    assert classify(row) == classify(row)


def test_classify_rejects_unknown_entries():
    with pytest.raises(TypeError):
        classify("not an entry")


def test_rows_are_hashable():
    """Decoded views are immutable values."""
    tags = ColumnDefinition("tags", is_complex=True)
    row = Row(
        cells=(Cell("tags", path=("k",)),),
        columns=(tags,),
        complex_data=(ComplexColumnData(tags, DEAD),),
    )
    same = Row(
        cells=(Cell("tags", path=("k",)),),
        columns=(tags,),
        complex_data=(ComplexColumnData(tags, DEAD),),
    )

    assert hash(row) == hash(same)
    assert {row, same} == {row}
