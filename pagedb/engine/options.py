# File: /pagedb/engine/options.py | Version: 1.0 | Title: Option registry for select / multi_select columns
from __future__ import annotations

import random
from typing import Iterable, List, NamedTuple, Optional, Tuple

from pagedb.engine.codec import encode_multi_select, parse_multi_select
from pagedb.engine.errors import (
    InvalidColumnType,
    InvalidPropertyValue,
    InvalidReorder,
    OptionNotFound,
)
from pagedb.engine.schema import Column, Option, PropertyType, Row, gen_id

# (hex, name) pairs, in picker order
OPTION_COLORS: List[Tuple[str, str]] = [
    ("#e5e5e5", "Default"),
    ("#9ca3af", "Gray"),
    ("#a8a29e", "Brown"),
    ("#fdba74", "Orange"),
    ("#fde047", "Yellow"),
    ("#86efac", "Green"),
    ("#93c5fd", "Blue"),
    ("#c4b5fd", "Purple"),
    ("#f9a8d4", "Pink"),
    ("#fca5a5", "Red"),
]
PALETTE = [hex_ for hex_, _ in OPTION_COLORS]


class PropertyChange(NamedTuple):
    row_id: str
    column_id: str
    raw_value: Optional[str]


def is_light_color(hex_color: str) -> bool:
    color = hex_color.lstrip("#")
    try:
        r = int(color[0:2], 16)
        g = int(color[2:4], 16)
        b = int(color[4:6], 16)
    except ValueError:
        return False
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return luminance > 0.5


def pick_color(column: Column, policy: str = "random") -> str:
    if policy == "round_robin":
        return PALETTE[len(column.options or []) % len(PALETTE)]
    return random.choice(PALETTE)


def _require_choice(column: Column) -> None:
    if not column.is_choice:
        raise InvalidColumnType(
            f"Column '{column.name}' ({column.property_type.value}) has no options"
        )


def _index_of(column: Column, option_id: str) -> int:
    for i, opt in enumerate(column.options or []):
        if opt.id == option_id:
            return i
    raise OptionNotFound(f"Option {option_id} not found on column '{column.name}'")


def _check_color(color: str) -> str:
    if color not in PALETTE:
        raise InvalidPropertyValue(f"Color {color} is not in the option palette")
    return color


# ---- Registry operations ----
# Each returns a new Column; the input column is never mutated.


def create_option(
    column: Column,
    label: str,
    color: Optional[str] = None,
    *,
    policy: str = "random",
) -> Tuple[Column, Option]:
    """
    Append a new option. Callers validate that ``label`` is non-empty.
    """
    _require_choice(column)
    option = Option(
        id=gen_id(),
        label=label,
        color=_check_color(color) if color else pick_color(column, policy),
    )
    options = list(column.options or []) + [option]
    return column.model_copy(update={"options": options}), option


def rename_option(column: Column, option_id: str, new_label: str) -> Column:
    _require_choice(column)
    idx = _index_of(column, option_id)
    options = list(column.options or [])
    options[idx] = options[idx].model_copy(update={"label": new_label})
    return column.model_copy(update={"options": options})


def recolor_option(column: Column, option_id: str, new_color: str) -> Column:
    _require_choice(column)
    idx = _index_of(column, option_id)
    options = list(column.options or [])
    options[idx] = options[idx].model_copy(update={"color": _check_color(new_color)})
    return column.model_copy(update={"options": options})


def delete_option(
    column: Column, option_id: str, rows: Iterable[Row]
) -> Tuple[Column, List[PropertyChange]]:
    """
    Remove an option and compute the row value changes that strip every
    reference to it. ``select`` values are cleared; ``multi_select`` arrays
    lose the id and collapse to null once empty.
    """
    _require_choice(column)
    idx = _index_of(column, option_id)
    options = list(column.options or [])
    del options[idx]

    changes: List[PropertyChange] = []
    for row in rows:
        raw = row.raw_value(column.id)
        if column.property_type == PropertyType.select:
            if raw == option_id:
                changes.append(PropertyChange(row.id, column.id, None))
        else:
            ids = parse_multi_select(raw)
            if option_id in ids:
                kept = [i for i in ids if i != option_id]
                changes.append(
                    PropertyChange(row.id, column.id, encode_multi_select(kept))
                )

    return column.model_copy(update={"options": options}), changes


def reorder_options(column: Column, ordered: List[Option]) -> Column:
    """Replace the option list with a permutation of itself."""
    _require_choice(column)
    current = [o.id for o in column.options or []]
    proposed = [o.id for o in ordered]
    if len(proposed) != len(set(proposed)) or sorted(current) != sorted(proposed):
        raise InvalidReorder(
            f"Reorder for column '{column.name}' must contain exactly the existing option ids"
        )
    return column.model_copy(update={"options": list(ordered)})


def reorder_option_ids(column: Column, ordered_ids: List[str]) -> Column:
    """Same as reorder_options, keyed by id (labels and colors kept as-is)."""
    _require_choice(column)
    by_id = {o.id: o for o in column.options or []}
    if sorted(by_id) != sorted(ordered_ids) or len(ordered_ids) != len(set(ordered_ids)):
        raise InvalidReorder(
            f"Reorder for column '{column.name}' must contain exactly the existing option ids"
        )
    return reorder_options(column, [by_id[i] for i in ordered_ids])
