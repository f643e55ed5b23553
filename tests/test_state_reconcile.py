# File: /tests/test_state_reconcile.py | Version: 1.0 | Title: DatabaseState writes (commit on success, unchanged on failure)
import pytest
from conftest import make_row

from pagedb.engine.datastore import QueryState
from pagedb.engine.errors import (
    ColumnNotFound,
    InvalidColumnType,
    InvalidPropertyValue,
    InvalidQuery,
    LastViewError,
    PersistenceError,
)
from pagedb.engine.schema import (
    Filter,
    FilterOperator,
    PropertyType,
    SortLevel,
    View,
    ViewType,
)
from pagedb.engine.state import DatabaseState


class FakeStore:
    """Records every write; raises on any write while ``fail`` is set."""

    def __init__(self):
        self.fail = False
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("load_"):
            raise AttributeError(name)

        def _write(*args, **kwargs):
            if self.fail:
                raise RuntimeError("disk on fire")
            self.calls.append((name, args, kwargs))

        return _write


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
def state(store, status_column, tags_column):
    views = [View(id="v1", name="Table"), View(id="v2", name="Board", type=ViewType.board)]
    return DatabaseState(
        "db1",
        store,
        columns=[status_column, tags_column],
        rows=[
            make_row("A", "Alpha", status="o1", tags='["t1", "t2"]'),
            make_row("B", "Beta", tags='["t1"]'),
        ],
        views=views,
        query=QueryState(active_view_id="v2"),
    )


def _snapshot(s):
    return (s.columns, s.rows, s.views, s.query)


def test_rows_are_padded_with_empty_values(state):
    beta = state.row("B")
    assert beta.raw_value("status") is None
    assert {p.column_id for p in beta.properties} == {"status", "tags"}


def test_failed_writes_leave_state_unchanged(state, store):
    before = _snapshot(state)
    store.fail = True
    attempts = [
        lambda: state.add_column("Due", PropertyType.date),
        lambda: state.rename_column("status", "Stage"),
        lambda: state.delete_column("tags"),
        lambda: state.create_option("status", "Blocked"),
        lambda: state.delete_option("tags", "t1"),
        lambda: state.reorder_options("status", ["o2", "o1"]),
        lambda: state.add_row("Gamma"),
        lambda: state.rename_row("A", "Renamed"),
        lambda: state.set_property("A", "status", "o2"),
        lambda: state.move_row_to_bucket("B", "o1"),
        lambda: state.add_view(ViewType.gallery),
        lambda: state.delete_view("v2"),
        lambda: state.set_active_view("v1"),
        lambda: state.set_filters([Filter(column_id="title", operator=FilterOperator.contains, value="a")]),
    ]
    for attempt in attempts:
        with pytest.raises(PersistenceError):
            attempt()
        assert _snapshot(state) == before
    assert store.calls == []


def test_validation_errors_raise_before_writing(state, store):
    with pytest.raises(InvalidPropertyValue):
        state.set_property("A", "status", "no-such-option")
    with pytest.raises(InvalidColumnType):
        state.toggle_checkbox("A", "status")
    with pytest.raises(ColumnNotFound):
        state.rename_column("ghost", "x")
    assert store.calls == []


def test_add_column_backfills_rows(state, store):
    col = state.add_column("Due", PropertyType.date, width=120)
    assert store.calls[0][0] == "insert_column"
    assert col.display_order == 3
    assert all(any(p.column_id == col.id for p in r.properties) for r in state.rows)


def test_delete_option_applies_cascade_locally(state, store):
    state.delete_option("tags", "t1")
    name, _, _ = store.calls[-1]
    assert name == "delete_option"
    assert [o.id for o in state.column("tags").options] == ["t2"]
    assert state.row("A").raw_value("tags") == '["t2"]'
    assert state.row("B").raw_value("tags") is None


def test_rename_option_keeps_row_references(state):
    state.rename_option("status", "o1", "Backlog")
    assert state.row("A").raw_value("status") == "o1"
    board = state.project("v2")
    assert [b.label for b in board.buckets] == ["No Status", "Backlog", "Done"]


def test_toggle_and_board_move(state):
    state.add_column("Done", PropertyType.checkbox)
    done_id = state.columns[-1].id
    assert state.toggle_checkbox("A", done_id).raw_value(done_id) == "true"
    assert state.toggle_checkbox("A", done_id).raw_value(done_id) == "false"
    assert state.move_row_to_bucket("B", "o2").raw_value("status") == "o2"
    assert state.move_row_to_bucket("B", None).raw_value("status") is None


def test_delete_active_view_falls_back_to_first(state):
    state.delete_view("v2")
    assert [v.id for v in state.views] == ["v1"]
    assert state.active_view.id == "v1"
    with pytest.raises(LastViewError):
        state.delete_view("v1")


def test_sort_levels_capped_by_sortable_columns(state, store):
    too_many = [SortLevel(column_id=c) for c in ("title", "status", "tags", "ghost")]
    with pytest.raises(InvalidQuery):
        state.set_sorts(too_many)
    q = state.set_sorts(too_many[:3])
    assert len(q.sorts) == 3


def test_one_sort_level_per_column(state, store):
    # "Title" and "title" name the same virtual column
    with pytest.raises(InvalidQuery):
        state.set_sorts([SortLevel(column_id="Title"), SortLevel(column_id="title")])
    with pytest.raises(InvalidQuery):
        state.set_sorts([SortLevel(column_id="status"), SortLevel(column_id="status")])
    assert store.calls == []


def test_rejected_query_update_writes_nothing(state, store):
    before = state.query
    flt = Filter(column_id="title", operator=FilterOperator.contains, value="x")
    with pytest.raises(InvalidQuery):
        state.set_query(filters=[flt], sorts=[SortLevel(column_id="title")] * 2)
    assert state.query == before
    assert store.calls == []


def test_query_update_is_one_write(state, store):
    flt = Filter(column_id="title", operator=FilterOperator.contains, value="a")
    q = state.set_query(filters=[flt], sorts=[SortLevel(column_id="status")])
    assert [c[0] for c in store.calls] == ["save_query"]
    assert q.filters == [flt]
    assert [s.column_id for s in q.sorts] == ["status"]
    # omitted lists are kept
    q = state.set_query(filters=[])
    assert [s.column_id for s in q.sorts] == ["status"]


def test_project_uses_shared_query(state):
    state.set_filters([Filter(column_id="title", operator=FilterOperator.starts_with, value="be")])
    table = state.project("v1")
    assert [r.id for r in table.rows] == ["B"]
    # same filters apply to every view
    board = state.project()
    assert [r.id for b in board.buckets for r in b.rows] == ["B"]
