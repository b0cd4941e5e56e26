"""Row classifier.

Maps one row or range marker to the tombstone categories it contributes.
"""

from __future__ import annotations

from collections import Counter

from ..core.stats import Category, Classification
from ..core.types import RangeMarker, Row, Unfiltered


def classify_row(row: Row) -> Classification:
    """Classify one row, its cells and its complex columns.

    A row with expiring liveness info accounts for the expiry of its cells,
    so expiring cells only count as cell TTL tombstones on non-expiring rows.
    """
    tombstones: Counter = Counter()
    row_expiring = row.liveness.is_expiring()

    if not row.deletion.is_live():
        tombstones[Category.ROW_DELETION] += 1

    if row_expiring:
        tombstones[Category.ROW_TTL] += 1

    cells = 0
    for cell in row.cells:
        cells += 1
        if cell.is_tombstone:
            tombstones[Category.CELL_DELETION] += 1
        if cell.is_expiring and not row_expiring:
            tombstones[Category.CELL_TTL] += 1

    if row.has_complex_deletion():
        for column in row.columns:
            if not column.is_complex:
                continue
            complex_data = row.get_complex_column_data(column)
            # Columns without complex data are skipped
            if complex_data is not None and not complex_data.complex_deletion.is_live():
                tombstones[Category.COMPLEX_COLUMN] += 1

    return Classification(tombstones=tombstones, cells=cells)


def classify(entry: Unfiltered) -> Classification:
    """Classify a row or range marker."""
    match entry:
        case Row():
            return classify_row(entry)
        case RangeMarker():
            return Classification(tombstones=Counter({Category.RANGE: 1}))
        case _:
            raise TypeError(f"Unexpected unfiltered entry: {type(entry).__name__}")
