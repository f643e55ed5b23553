# File: /pagedb/engine/state.py | Version: 1.0 | Title: In-memory database state with mutate-and-reconcile writes
"""
DatabaseState holds one database's columns, rows, views and shared query.

Every mutation follows the same contract:
  1. compute the new value(s) without touching local state,
  2. write the changed field(s) through the Datastore,
  3. only on success, patch the in-memory copy.
A failed write raises PersistenceError and leaves the state as it was.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from pagedb.engine import codec, options as option_registry
from pagedb.engine.datastore import Datastore, QueryState
from pagedb.engine.errors import (
    ColumnNotFound,
    InvalidQuery,
    LastViewError,
    PageDBError,
    PersistenceError,
    RowNotFound,
    ViewNotFound,
)
from pagedb.engine.options import PropertyChange
from pagedb.engine.projection import Projection, board_move_value, run_view
from pagedb.engine.schema import (
    TITLE_COLUMN_ID,
    VIEW_TYPE_LABELS,
    Column,
    Filter,
    Option,
    PropertyType,
    PropertyValue,
    Row,
    SortLevel,
    View,
    ViewType,
    ensure_properties,
    gen_id,
    is_title_column,
)
from pagedb.engine.sorting import add_sort_level, sortable_columns

log = logging.getLogger(__name__)


class DatabaseState:
    def __init__(
        self,
        database_id: str,
        store: Datastore,
        *,
        columns: Optional[List[Column]] = None,
        rows: Optional[List[Row]] = None,
        views: Optional[List[View]] = None,
        query: Optional[QueryState] = None,
        color_policy: str = "random",
    ):
        self.database_id = database_id
        self.store = store
        self.color_policy = color_policy
        self._columns: List[Column] = sorted(columns or [], key=lambda c: c.display_order)
        self._rows: List[Row] = [ensure_properties(r, self._columns) for r in rows or []]
        self._views: List[View] = list(views or [])
        self._query: QueryState = query or QueryState()

    @classmethod
    def load(cls, store: Datastore, database_id: str, **kwargs) -> "DatabaseState":
        return cls(
            database_id,
            store,
            columns=store.load_schema(database_id),
            rows=store.load_rows(database_id),
            views=store.load_views(database_id),
            query=store.load_query(database_id),
            **kwargs,
        )

    # ---- Read access ----

    @property
    def columns(self) -> List[Column]:
        return list(self._columns)

    @property
    def rows(self) -> List[Row]:
        return list(self._rows)

    @property
    def views(self) -> List[View]:
        return list(self._views)

    @property
    def query(self) -> QueryState:
        return self._query

    @property
    def filters(self) -> List[Filter]:
        return list(self._query.filters)

    @property
    def sorts(self) -> List[SortLevel]:
        return list(self._query.sorts)

    @property
    def active_view(self) -> Optional[View]:
        for v in self._views:
            if v.id == self._query.active_view_id:
                return v
        return self._views[0] if self._views else None

    def column(self, column_id: str) -> Column:
        for c in self._columns:
            if c.id == column_id:
                return c
        raise ColumnNotFound(f"Column {column_id} not found")

    def row(self, row_id: str) -> Row:
        for r in self._rows:
            if r.id == row_id:
                return r
        raise RowNotFound(f"Row {row_id} not found")

    def view(self, view_id: str) -> View:
        for v in self._views:
            if v.id == view_id:
                return v
        raise ViewNotFound(f"View {view_id} not found")

    # ---- Write plumbing ----

    def _write(self, what: str, fn: Callable[..., Any], *args, **kwargs) -> None:
        try:
            fn(*args, **kwargs)
        except PageDBError:
            raise
        except Exception as exc:
            log.warning("Persistence failed (%s) for database %s: %s", what, self.database_id, exc)
            raise PersistenceError(f"Could not persist {what}") from exc

    def _replace_column(self, column: Column) -> None:
        self._columns = [column if c.id == column.id else c for c in self._columns]

    def _replace_row(self, row: Row) -> None:
        self._rows = [row if r.id == row.id else r for r in self._rows]

    def _apply_changes(self, changes: List[PropertyChange]) -> None:
        by_row: Dict[str, Row] = {r.id: r for r in self._rows}
        for ch in changes:
            if ch.row_id in by_row:
                by_row[ch.row_id] = by_row[ch.row_id].with_value(ch.column_id, ch.raw_value)
        self._rows = [by_row[r.id] for r in self._rows]

    # ---- Columns ----

    def add_column(
        self, name: str, property_type: PropertyType, *, width: Optional[int] = None
    ) -> Column:
        next_order = max((c.display_order for c in self._columns), default=-1) + 1
        column = Column(
            id=gen_id(),
            name=name,
            property_type=property_type,
            display_order=next_order,
            width=width,
        )
        self._write("add column", self.store.insert_column, self.database_id, column)
        self._columns.append(column)
        # existing rows get an empty value for the new column
        self._rows = [
            r.model_copy(update={"properties": list(r.properties) + [PropertyValue(column_id=column.id)]})
            for r in self._rows
        ]
        log.info("Added %s column %s to database %s", property_type.value, column.id, self.database_id)
        return column

    def rename_column(self, column_id: str, name: str) -> Column:
        updated = self.column(column_id).model_copy(update={"name": name})
        self._write("rename column", self.store.update_column, column_id, name=name)
        self._replace_column(updated)
        return updated

    def resize_column(self, column_id: str, width: Optional[int]) -> Column:
        updated = self.column(column_id).model_copy(update={"width": width})
        self._write("resize column", self.store.update_column, column_id, width=width)
        self._replace_column(updated)
        return updated

    def delete_column(self, column_id: str) -> None:
        self.column(column_id)
        self._write("delete column", self.store.delete_column, column_id)
        self._columns = [c for c in self._columns if c.id != column_id]
        self._rows = [
            r.model_copy(update={"properties": [p for p in r.properties if p.column_id != column_id]})
            for r in self._rows
        ]
        log.info("Deleted column %s from database %s", column_id, self.database_id)

    # ---- Options ----

    def create_option(self, column_id: str, label: str, color: Optional[str] = None) -> Option:
        updated, option = option_registry.create_option(
            self.column(column_id), label, color, policy=self.color_policy
        )
        self._write("create option", self.store.write_options, column_id, updated.options)
        self._replace_column(updated)
        return option

    def rename_option(self, column_id: str, option_id: str, label: str) -> Column:
        updated = option_registry.rename_option(self.column(column_id), option_id, label)
        self._write("rename option", self.store.write_options, column_id, updated.options)
        self._replace_column(updated)
        return updated

    def recolor_option(self, column_id: str, option_id: str, color: str) -> Column:
        updated = option_registry.recolor_option(self.column(column_id), option_id, color)
        self._write("recolor option", self.store.write_options, column_id, updated.options)
        self._replace_column(updated)
        return updated

    def delete_option(self, column_id: str, option_id: str) -> Column:
        updated, changes = option_registry.delete_option(
            self.column(column_id), option_id, self._rows
        )
        self._write(
            "delete option", self.store.delete_option, column_id, updated.options, changes
        )
        self._replace_column(updated)
        self._apply_changes(changes)
        log.info(
            "Deleted option %s from column %s (%d row values cleared)",
            option_id,
            column_id,
            len(changes),
        )
        return updated

    def reorder_options(self, column_id: str, ordered_ids: List[str]) -> Column:
        updated = option_registry.reorder_option_ids(self.column(column_id), ordered_ids)
        self._write("reorder options", self.store.write_options, column_id, updated.options)
        self._replace_column(updated)
        return updated

    # ---- Rows ----

    def add_row(self, name: str = "", icon: Optional[str] = None) -> Row:
        row = Row(
            id=gen_id(),
            name=name,
            icon=icon,
            properties=[PropertyValue(column_id=c.id) for c in self._columns],
        )
        self._write("add row", self.store.insert_row, self.database_id, row)
        self._rows.append(row)
        log.info("Added row %s to database %s", row.id, self.database_id)
        return row

    def rename_row(self, row_id: str, name: str) -> Row:
        # the row name is the Title value; one write keeps both in sync
        updated = self.row(row_id).model_copy(update={"name": name})
        self._write("rename row", self.store.update_row, row_id, name=name)
        self._replace_row(updated)
        return updated

    def set_row_icon(self, row_id: str, icon: Optional[str]) -> Row:
        updated = self.row(row_id).model_copy(update={"icon": icon})
        self._write("set row icon", self.store.update_row, row_id, icon=icon)
        self._replace_row(updated)
        return updated

    def delete_row(self, row_id: str) -> None:
        self.row(row_id)
        self._write("delete row", self.store.delete_row, row_id)
        self._rows = [r for r in self._rows if r.id != row_id]

    def set_property(self, row_id: str, column_id: str, value: Any) -> Row:
        raw = codec.normalize_input(self.column(column_id), value)
        return self._set_raw(row_id, column_id, raw)

    def toggle_checkbox(self, row_id: str, column_id: str) -> Row:
        column = self.column(column_id)
        codec.require_checkbox(column)
        raw = codec.toggle_checkbox(self.row(row_id).raw_value(column_id))
        return self._set_raw(row_id, column_id, raw)

    def move_row_to_bucket(self, row_id: str, target_key: Optional[str]) -> Row:
        """Board drag: write the target option id (or clear) on the group column."""
        group, raw = board_move_value(self._columns, target_key)
        return self._set_raw(row_id, group.id, raw)

    def _set_raw(self, row_id: str, column_id: str, raw: Optional[str]) -> Row:
        updated = self.row(row_id).with_value(column_id, raw)
        self._write("property value", self.store.write_property, row_id, column_id, raw)
        self._replace_row(updated)
        return updated

    # ---- Views ----

    def add_view(self, view_type: ViewType, name: Optional[str] = None) -> View:
        view = View(id=gen_id(), name=name or VIEW_TYPE_LABELS[view_type], type=view_type)
        self._write("add view", self.store.insert_view, self.database_id, view, len(self._views))
        self._views.append(view)
        return view

    def rename_view(self, view_id: str, name: str) -> View:
        updated = self.view(view_id).model_copy(update={"name": name})
        self._write("rename view", self.store.update_view, view_id, name=name)
        self._views = [updated if v.id == view_id else v for v in self._views]
        return updated

    def delete_view(self, view_id: str) -> None:
        self.view(view_id)
        if len(self._views) <= 1:
            raise LastViewError("A database must keep at least one view")
        remaining = [v for v in self._views if v.id != view_id]
        # the datastore falls back to the first remaining view the same way
        self._write("delete view", self.store.delete_view, view_id)
        self._views = remaining
        if self._query.active_view_id == view_id:
            self._query = self._query.model_copy(update={"active_view_id": remaining[0].id})

    def set_active_view(self, view_id: str) -> View:
        view = self.view(view_id)
        query = self._query.model_copy(update={"active_view_id": view_id})
        self._write("active view", self.store.save_query, self.database_id, query)
        self._query = query
        return view

    # ---- Shared filters / sorts ----

    def _check_sorts(self, sorts: List[SortLevel]) -> None:
        limit = len(sortable_columns(self._columns))
        if len(sorts) > limit:
            raise InvalidQuery(f"At most {limit} sort levels are allowed for this database")
        seen = [TITLE_COLUMN_ID if is_title_column(s.column_id) else s.column_id for s in sorts]
        if len(seen) != len(set(seen)):
            raise InvalidQuery("A column can only have one sort level")

    def set_query(
        self,
        *,
        filters: Optional[List[Filter]] = None,
        sorts: Optional[List[SortLevel]] = None,
    ) -> QueryState:
        """Replace filters and/or sorts in one write; omitted lists are kept."""
        update: Dict[str, Any] = {}
        if sorts is not None:
            self._check_sorts(sorts)
            update["sorts"] = list(sorts)
        if filters is not None:
            update["filters"] = list(filters)
        if not update:
            return self._query
        query = self._query.model_copy(update=update)
        self._write("query", self.store.save_query, self.database_id, query)
        self._query = query
        return query

    def set_filters(self, filters: List[Filter]) -> QueryState:
        return self.set_query(filters=filters)

    def set_sorts(self, sorts: List[SortLevel]) -> QueryState:
        return self.set_query(sorts=sorts)

    def add_sort_level(self) -> QueryState:
        """Append an ascending level on the first column not sorted on yet."""
        sorts = add_sort_level(self._columns, self._query.sorts)
        if len(sorts) == len(self._query.sorts):
            raise InvalidQuery("Every column already has a sort level")
        return self.set_sorts(sorts)

    # ---- Projection ----

    def project(self, view_id: Optional[str] = None, **limits) -> Projection:
        view = self.view(view_id) if view_id else self.active_view
        if view is None:
            raise ViewNotFound("Database has no views")
        return run_view(view, self._rows, self._columns, self._query.filters, self._query.sorts, **limits)
