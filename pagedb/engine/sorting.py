# File: /pagedb/engine/sorting.py | Version: 1.0 | Title: Multi-level stable sort
from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Dict, List, Optional

from pagedb.engine.codec import (
    CheckboxValue,
    DateValue,
    DecodedValue,
    NumberValue,
    decode,
    encode,
    epoch_ms,
)
from pagedb.engine.schema import (
    TITLE_COLUMN_ID,
    Column,
    Row,
    SortDirection,
    SortLevel,
    columns_by_id,
    gen_id,
    is_title_column,
    title_column,
)


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def _collate(s: str):
    # case-insensitive first, raw string breaks ties deterministically
    return (s.casefold(), s)


def compare_strings(a: str, b: str) -> int:
    ka, kb = _collate(a), _collate(b)
    return (ka > kb) - (ka < kb)


def compare_values(a: DecodedValue, b: DecodedValue) -> int:
    """Both sides come from the same column, so they carry the same kind."""
    if isinstance(a, NumberValue) and isinstance(b, NumberValue):
        return _sign(a.number - b.number)
    if isinstance(a, DateValue) and isinstance(b, DateValue):
        return _sign(epoch_ms(a.value) - epoch_ms(b.value))
    if isinstance(a, CheckboxValue) and isinstance(b, CheckboxValue):
        return int(a.checked) - int(b.checked)
    return compare_strings(encode(a) or "", encode(b) or "")


def cell_value(row: Row, column: Column) -> DecodedValue:
    if column.id == TITLE_COLUMN_ID:
        return decode(column, row.name)
    return decode(column, row.raw_value(column.id))


def _level_column(level: SortLevel, cols: Dict[str, Column]) -> Optional[Column]:
    """Column a sort level reads, or None if dangling."""
    if is_title_column(level.column_id):
        return title_column()
    return cols.get(level.column_id)


def make_comparator(
    sorts: List[SortLevel], columns: List[Column]
) -> Callable[[Row, Row], int]:
    cols = columns_by_id(columns)
    levels = []
    for level in sorts:
        col = _level_column(level, cols)
        if col is None:
            continue
        flip = -1 if level.direction == SortDirection.desc else 1
        levels.append((col, flip))

    def _cmp(a: Row, b: Row) -> int:
        for col, flip in levels:
            c = compare_values(cell_value(a, col), cell_value(b, col))
            if c:
                return c * flip
        return 0

    return _cmp


def sort_rows(
    rows: List[Row], sorts: List[SortLevel], columns: List[Column]
) -> List[Row]:
    """sorted() is a stable merge sort, so full ties keep their input order."""
    if not sorts:
        return list(rows)
    return sorted(rows, key=cmp_to_key(make_comparator(sorts, columns)))


def sortable_columns(columns: List[Column]) -> List[Column]:
    return [title_column()] + sorted(columns, key=lambda c: c.display_order)


def next_sort_column(
    columns: List[Column], sorts: List[SortLevel]
) -> Optional[Column]:
    used = {
        TITLE_COLUMN_ID if is_title_column(s.column_id) else s.column_id for s in sorts
    }
    for col in sortable_columns(columns):
        if col.id not in used:
            return col
    return None


def add_sort_level(columns: List[Column], sorts: List[SortLevel]) -> List[SortLevel]:
    """Append an ascending level on the first unused column, if any remain."""
    col = next_sort_column(columns, sorts)
    if col is None:
        return list(sorts)
    return list(sorts) + [
        SortLevel(id=gen_id(), column_id=col.id, direction=SortDirection.asc)
    ]
