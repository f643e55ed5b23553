# File: /pagedb/engine/filtering.py | Version: 1.0 | Title: Filter engine (AND-only per-column predicates)
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from pagedb.engine.codec import display_text, is_empty
from pagedb.engine.schema import (
    Column,
    Filter,
    FilterOperator,
    Row,
    columns_by_id,
    is_title_column,
)

log = logging.getLogger(__name__)


def _row_text(row: Row, column_id: str, cols: Dict[str, Column]) -> Optional[str]:
    """
    Displayable string for a row/column pair, or None when the column is unknown.
    """
    if is_title_column(column_id):
        return row.name or ""
    col = cols.get(column_id)
    if col is None:
        return None
    return display_text(col, row.raw_value(column_id))


def _row_raw(row: Row, column_id: str) -> Optional[str]:
    if is_title_column(column_id):
        return row.name
    return row.raw_value(column_id)


def matches(row: Row, flt: Filter, cols: Dict[str, Column]) -> bool:
    op = flt.operator

    if not is_title_column(flt.column_id) and flt.column_id not in cols:
        # unknown column: vacuously true
        return True

    if op == FilterOperator.is_empty:
        return is_empty(_row_raw(row, flt.column_id))
    if op == FilterOperator.is_not_empty:
        return not is_empty(_row_raw(row, flt.column_id))

    value = (_row_text(row, flt.column_id, cols) or "").lower()
    needle = (flt.value or "").lower()

    if op == FilterOperator.is_:
        return value == needle
    if op == FilterOperator.is_not:
        return value != needle
    if op == FilterOperator.contains:
        return needle in value
    if op == FilterOperator.does_not_contain:
        return needle not in value
    if op == FilterOperator.starts_with:
        return value.startswith(needle)
    if op == FilterOperator.ends_with:
        return value.endswith(needle)
    return True


def apply_filters(
    rows: List[Row], filters: List[Filter], columns: List[Column]
) -> List[Row]:
    if not filters:
        return list(rows)
    cols = columns_by_id(columns)
    dangling = [
        f.column_id
        for f in filters
        if not is_title_column(f.column_id) and f.column_id not in cols
    ]
    if dangling:
        log.debug("Ignoring filters on unknown columns: %s", dangling)
    return [r for r in rows if all(matches(r, f, cols) for f in filters)]
