# File: /pagedb/engine/projection.py | Version: 1.0 | Title: View projector (table / board / gallery / list)
"""
Reshapes an already filtered + sorted row sequence for one view type.
Projections never mutate rows; the only write tied to a view is moving a
row between Board buckets, which ``board_move_value`` turns into a plain
property update for the caller to commit.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

from pagedb.engine.codec import format_value
from pagedb.engine.errors import NoGroupColumn, OptionNotFound
from pagedb.engine.filtering import apply_filters
from pagedb.engine.schema import (
    Column,
    Filter,
    Option,
    PropertyType,
    Row,
    SortLevel,
    View,
    ViewType,
    title_column,
)
from pagedb.engine.sorting import sort_rows

log = logging.getLogger(__name__)

GALLERY_COVER_COLORS = [
    "rgba(59, 130, 246, 0.15)",  # blue
    "rgba(16, 185, 129, 0.15)",  # green
    "rgba(245, 158, 11, 0.15)",  # amber
    "rgba(239, 68, 68, 0.15)",  # red
    "rgba(139, 92, 246, 0.15)",  # purple
    "rgba(236, 72, 153, 0.15)",  # pink
    "rgba(20, 184, 166, 0.15)",  # teal
]

CATCH_ALL_KEY = "__none__"


# ---- Projection shapes ----


class TableProjection(BaseModel):
    view_type: Literal["table"] = "table"
    title_column: Column
    columns: List[Column]
    rows: List[Row]


class ListProjection(BaseModel):
    view_type: Literal["list"] = "list"
    columns: List[Column]
    rows: List[Row]
    # row id -> column id -> presentation text, for the summary columns
    values: Dict[str, Dict[str, str]] = Field(default_factory=dict)


class GalleryCard(BaseModel):
    row: Row
    cover_color: str
    values: Dict[str, str] = Field(default_factory=dict)


class GalleryProjection(BaseModel):
    view_type: Literal["gallery"] = "gallery"
    columns: List[Column]
    cards: List[GalleryCard]


class BoardBucket(BaseModel):
    key: str
    label: str
    option: Optional[Option] = None
    rows: List[Row] = Field(default_factory=list)


class BoardProjection(BaseModel):
    view_type: Literal["board"] = "board"
    group_column: Column
    card_columns: List[Column]
    buckets: List[BoardBucket]
    values: Dict[str, Dict[str, str]] = Field(default_factory=dict)


Projection = Union[TableProjection, ListProjection, GalleryProjection, BoardProjection]


# ---- Helpers ----


def ordered_columns(columns: List[Column]) -> List[Column]:
    return sorted(columns, key=lambda c: c.display_order)


def summary_columns(columns: List[Column], limit: int) -> List[Column]:
    return ordered_columns(columns)[: max(limit, 0)]


def first_select_column(columns: List[Column]) -> Optional[Column]:
    """Board group-by policy: leftmost ``select`` column."""
    for col in ordered_columns(columns):
        if col.property_type == PropertyType.select:
            return col
    return None


def gallery_cover_color(row_id: str) -> str:
    total = sum(ord(ch) for ch in row_id)
    return GALLERY_COVER_COLORS[total % len(GALLERY_COVER_COLORS)]


def formatted_cells(row: Row, columns: List[Column]) -> Dict[str, str]:
    return {c.id: format_value(c, row.raw_value(c.id)) for c in columns}


# ---- Projectors ----


def project_table(rows: List[Row], columns: List[Column]) -> TableProjection:
    return TableProjection(
        title_column=title_column(), columns=ordered_columns(columns), rows=list(rows)
    )


def project_list(rows: List[Row], columns: List[Column], *, limit: int = 3) -> ListProjection:
    shown = summary_columns(columns, limit)
    return ListProjection(
        columns=shown,
        rows=list(rows),
        values={r.id: formatted_cells(r, shown) for r in rows},
    )


def project_gallery(
    rows: List[Row], columns: List[Column], *, limit: int = 3
) -> GalleryProjection:
    shown = summary_columns(columns, limit)
    return GalleryProjection(
        columns=shown,
        cards=[
            GalleryCard(
                row=r,
                cover_color=gallery_cover_color(r.id),
                values=formatted_cells(r, shown),
            )
            for r in rows
        ],
    )


def project_board(
    rows: List[Row], columns: List[Column], *, card_limit: int = 2
) -> BoardProjection:
    group = first_select_column(columns)
    if group is None:
        raise NoGroupColumn("Board view needs at least one select column")

    catch_all = BoardBucket(key=CATCH_ALL_KEY, label=f"No {group.name}")
    buckets = [catch_all] + [
        BoardBucket(key=opt.id, label=opt.label, option=opt)
        for opt in group.options or []
    ]
    by_key = {b.key: b for b in buckets}

    for row in rows:
        raw = row.raw_value(group.id)
        # empty and dangling values both land in the catch-all bucket
        bucket = by_key.get(raw) if raw else None
        (bucket or catch_all).rows.append(row)

    cards = [c for c in ordered_columns(columns) if c.id != group.id][: max(card_limit, 0)]
    return BoardProjection(
        group_column=group,
        card_columns=cards,
        buckets=buckets,
        values={r.id: formatted_cells(r, cards) for r in rows},
    )


def project(
    view_type: ViewType,
    rows: List[Row],
    columns: List[Column],
    *,
    list_limit: int = 3,
    gallery_limit: int = 3,
    board_card_limit: int = 2,
) -> Projection:
    if view_type == ViewType.board:
        return project_board(rows, columns, card_limit=board_card_limit)
    if view_type == ViewType.gallery:
        return project_gallery(rows, columns, limit=gallery_limit)
    if view_type == ViewType.list:
        return project_list(rows, columns, limit=list_limit)
    return project_table(rows, columns)


def run_view(
    view: View,
    rows: List[Row],
    columns: List[Column],
    filters: List[Filter],
    sorts: List[SortLevel],
    **limits,
) -> Projection:
    """filter -> sort -> project, recomputed in full on every call."""
    narrowed = apply_filters(rows, filters, columns)
    ordered = sort_rows(narrowed, sorts, columns)
    log.debug(
        "Projecting view %s (%s): %d of %d rows",
        view.id,
        view.type.value,
        len(ordered),
        len(rows),
    )
    return project(view.type, ordered, columns, **limits)


def board_move_value(columns: List[Column], target_key: Optional[str]) -> Tuple[Column, Optional[str]]:
    """
    Resolve a Board drop target to (group column, raw value to write).
    ``None`` or the catch-all key clears the value.
    """
    group = first_select_column(columns)
    if group is None:
        raise NoGroupColumn("Board view needs at least one select column")
    if not target_key or target_key == CATCH_ALL_KEY:
        return group, None
    if group.find_option(target_key) is None:
        raise OptionNotFound(f"Option {target_key} not found on column '{group.name}'")
    return group, target_key
