# File: /tests/test_projection.py | Version: 1.0 | Title: View projector (board buckets, gallery covers, summaries)
import pytest
from conftest import make_row

from pagedb.engine.errors import NoGroupColumn, OptionNotFound
from pagedb.engine.projection import (
    CATCH_ALL_KEY,
    GALLERY_COVER_COLORS,
    board_move_value,
    gallery_cover_color,
    project,
    project_board,
    run_view,
)
from pagedb.engine.schema import (
    Column,
    Filter,
    FilterOperator,
    PropertyType,
    SortDirection,
    SortLevel,
    View,
    ViewType,
)


def _text(cid, order):
    return Column(id=cid, name=cid.title(), property_type=PropertyType.text, display_order=order)


def test_board_groups_by_first_select_with_catch_all(status_column):
    rows = [make_row("A", status="o1"), make_row("B"), make_row("C", status="o2")]
    board = project_board(rows, [status_column])
    assert board.group_column.id == "status"
    buckets = {b.label: [r.id for r in b.rows] for b in board.buckets}
    assert buckets == {"No Status": ["B"], "Todo": ["A"], "Done": ["C"]}
    assert board.buckets[0].key == CATCH_ALL_KEY


def test_board_partition_is_exhaustive_and_disjoint(status_column):
    rows = [
        make_row("r1", status="o2"),
        make_row("r2", status="dangling"),
        make_row("r3", status=""),
        make_row("r4", status="o1"),
        make_row("r5", status="o2"),
    ]
    board = project_board(rows, [status_column])
    seen = [r.id for b in board.buckets for r in b.rows]
    assert sorted(seen) == sorted(r.id for r in rows)
    assert len(seen) == len(set(seen))
    # bucket contents keep input order
    assert [r.id for r in board.buckets[2].rows] == ["r1", "r5"]
    assert [r.id for r in board.buckets[0].rows] == ["r2", "r3"]


def test_board_uses_leftmost_select_and_card_columns(status_column):
    later = status_column.model_copy(update={"id": "phase", "name": "Phase", "display_order": 9})
    cols = [later, _text("notes", 0), status_column, _text("owner", 2), _text("extra", 3)]
    board = project_board([], cols, card_limit=2)
    assert board.group_column.id == "status"
    assert [c.id for c in board.card_columns] == ["notes", "owner"]


def test_board_without_select_column_raises(tags_column):
    with pytest.raises(NoGroupColumn):
        project(ViewType.board, [], [tags_column, _text("notes", 0)])


def test_table_includes_title_and_all_columns(status_column, tags_column):
    table = project(ViewType.table, [make_row("a")], [tags_column, status_column])
    assert table.title_column.id == "title"
    assert [c.id for c in table.columns] == ["status", "tags"]


def test_summary_cells_use_presentation_format(status_column):
    due = Column(id="due", name="Due", property_type=PropertyType.date, display_order=0)
    done = Column(id="done", name="Done", property_type=PropertyType.checkbox, display_order=2)
    cols = [due, status_column, done]
    row = make_row("r1", due="2024-03-05", status="o2", done="true")
    blank = make_row("r2", due="someday")

    listing = project(ViewType.list, [row, blank], cols)
    assert listing.values["r1"] == {"due": "Mar 5, 2024", "status": "Done", "done": "✓"}
    assert listing.values["r2"] == {"due": "someday", "status": "", "done": ""}

    gallery = project(ViewType.gallery, [row], cols)
    assert gallery.cards[0].values["done"] == "✓"

    board = project(ViewType.board, [row, blank], cols)
    assert board.values["r1"] == {"due": "Mar 5, 2024", "done": "✓"}
    assert set(board.values) == {"r1", "r2"}


def test_list_and_gallery_summarize_first_three_columns():
    cols = [_text(f"c{i}", i) for i in range(5)]
    listing = project(ViewType.list, [make_row("a")], cols)
    gallery = project(ViewType.gallery, [make_row("a")], cols)
    assert [c.id for c in listing.columns] == ["c0", "c1", "c2"]
    assert [c.id for c in gallery.columns] == ["c0", "c1", "c2"]


def test_gallery_cover_color_is_deterministic():
    # "ab" -> 97 + 98 = 195, 195 % 7 == 6
    assert gallery_cover_color("ab") == GALLERY_COVER_COLORS[6]
    assert gallery_cover_color("row-1") == gallery_cover_color("row-1")
    gallery = project(ViewType.gallery, [make_row("ab")], [])
    assert gallery.cards[0].cover_color == GALLERY_COVER_COLORS[6]


def test_run_view_filters_then_sorts(status_column):
    rows = [
        make_row("a", "Zed", status="o1"),
        make_row("b", "Amy", status="o2"),
        make_row("c", "Bob", status="o1"),
    ]
    view = View(name="Table", type=ViewType.table)
    out = run_view(
        view,
        rows,
        [status_column],
        [Filter(column_id="status", operator=FilterOperator.is_, value="Todo")],
        [SortLevel(column_id="title", direction=SortDirection.asc)],
    )
    assert [r.id for r in out.rows] == ["c", "a"]


def test_board_move_value(status_column):
    group, raw = board_move_value([status_column], "o2")
    assert (group.id, raw) == ("status", "o2")
    assert board_move_value([status_column], CATCH_ALL_KEY)[1] is None
    assert board_move_value([status_column], None)[1] is None
    with pytest.raises(OptionNotFound):
        board_move_value([status_column], "nope")
