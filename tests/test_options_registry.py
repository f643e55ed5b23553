# File: /tests/test_options_registry.py | Version: 1.0 | Title: Option registry CRUD + delete cascade
import pytest
from conftest import make_row

from pagedb.engine import options as registry
from pagedb.engine.codec import parse_multi_select
from pagedb.engine.errors import (
    InvalidColumnType,
    InvalidPropertyValue,
    InvalidReorder,
    OptionNotFound,
)
from pagedb.engine.schema import Column, Option, PropertyType


def test_create_appends_with_fresh_id_and_palette_color(status_column):
    updated, opt = registry.create_option(status_column, "Blocked")
    assert [o.label for o in updated.options] == ["Todo", "Done", "Blocked"]
    assert opt.id not in {"o1", "o2"}
    assert opt.color in registry.PALETTE
    # input column untouched
    assert len(status_column.options) == 2


def test_create_round_robin_and_explicit_color(status_column):
    _, opt = registry.create_option(status_column, "Next", policy="round_robin")
    assert opt.color == registry.PALETTE[2]
    _, red = registry.create_option(status_column, "Red one", "#fca5a5")
    assert red.color == "#fca5a5"
    with pytest.raises(InvalidPropertyValue):
        registry.create_option(status_column, "Bad", "#123456")


def test_rename_keeps_id_position_and_references(status_column):
    rows = [make_row("A", status="o1")]
    updated = registry.rename_option(status_column, "o1", "Backlog")
    assert updated.options[0].id == "o1"
    assert updated.options[0].label == "Backlog"
    assert rows[0].raw_value("status") == "o1"


def test_duplicate_labels_allowed(status_column):
    updated = registry.rename_option(status_column, "o2", "Todo")
    assert [o.label for o in updated.options] == ["Todo", "Todo"]


def test_recolor_in_place(status_column):
    updated = registry.recolor_option(status_column, "o2", "#fde047")
    assert updated.options[1].color == "#fde047"
    assert updated.options[1].id == "o2"


def test_delete_select_clears_references(status_column):
    rows = [make_row("A", status="o1"), make_row("B", status="o2"), make_row("C", status=None)]
    updated, changes = registry.delete_option(status_column, "o1", rows)
    assert [o.id for o in updated.options] == ["o2"]
    assert changes == [registry.PropertyChange("A", "status", None)]


def test_delete_multi_select_strips_id_and_nulls_empty(tags_column):
    rows = [
        make_row("A", tags='["t1", "t2"]'),
        make_row("B", tags='["t1"]'),
        make_row("C", tags='["t2"]'),
        make_row("D", tags="{broken"),
    ]
    _, changes = registry.delete_option(tags_column, "t1", rows)
    by_row = {c.row_id: c.raw_value for c in changes}
    assert by_row == {"A": '["t2"]', "B": None}
    for ch in changes:
        assert "t1" not in parse_multi_select(ch.raw_value)


def test_unknown_option_raises(status_column):
    with pytest.raises(OptionNotFound):
        registry.rename_option(status_column, "zzz", "x")
    with pytest.raises(OptionNotFound):
        registry.delete_option(status_column, "zzz", [])


def test_reorder_requires_same_id_set(status_column):
    o1, o2 = status_column.options
    assert [o.id for o in registry.reorder_options(status_column, [o2, o1]).options] == ["o2", "o1"]
    with pytest.raises(InvalidReorder):
        registry.reorder_options(status_column, [o2])
    with pytest.raises(InvalidReorder):
        registry.reorder_options(status_column, [o1, o2, Option(id="o3", label="x", color="#e5e5e5")])
    with pytest.raises(InvalidReorder):
        registry.reorder_option_ids(status_column, ["o1", "o1"])


def test_options_require_choice_column():
    text_col = Column(id="n", name="Notes", property_type=PropertyType.text)
    with pytest.raises(InvalidColumnType):
        registry.create_option(text_col, "x")


def test_is_light_color():
    assert registry.is_light_color("#e5e5e5") is True
    assert registry.is_light_color("#000000") is False
