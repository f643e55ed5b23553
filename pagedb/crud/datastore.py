# File: /pagedb/crud/datastore.py | Version: 1.0 | Title: SQLAlchemy-backed Datastore for the engine
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pagedb.engine.datastore import QueryState
from pagedb.engine.errors import ColumnNotFound, RowNotFound, ViewNotFound
from pagedb.engine.options import PropertyChange
from pagedb.engine.schema import (
    Column,
    Filter,
    Option,
    PropertyValue as EnginePropertyValue,
    Row,
    SortLevel,
    View,
)
from pagedb.models import (
    DatabaseColumn,
    DatabaseQueryState,
    DatabaseView,
    Page,
    PropertyValue,
)


# ---- ORM -> engine conversion ----


def column_from_orm(c: DatabaseColumn) -> Column:
    return Column(
        id=c.id,
        name=c.name,
        property_type=c.property_type,
        display_order=c.display_order,
        width=c.width,
        options=[Option(**o) for o in (c.options or [])],
    )


def row_from_orm(p: Page, values: List[PropertyValue]) -> Row:
    return Row(
        id=p.id,
        name=p.name or "",
        icon=p.icon,
        properties=[
            EnginePropertyValue(column_id=v.column_id, raw_value=v.value) for v in values
        ],
    )


def view_from_orm(v: DatabaseView) -> View:
    return View(id=v.id, name=v.name, type=v.view_type)


def _dump_options(options: Optional[List[Option]]) -> List[Dict[str, Any]]:
    return [o.model_dump() for o in options or []]


class SqlDatastore:
    """
    Each write is one transaction: commit on success, rollback and re-raise
    on failure (lookups and staging included) so the session is never left
    dirty and the caller can keep its in-memory state unchanged.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---- Ingest ----

    def load_schema(self, database_id: str) -> List[Column]:
        rows = (
            self.db.query(DatabaseColumn)
            .filter(DatabaseColumn.database_id == database_id)
            .order_by(DatabaseColumn.display_order.asc())
            .all()
        )
        return [column_from_orm(c) for c in rows]

    def load_rows(self, database_id: str) -> List[Row]:
        pages = (
            self.db.query(Page)
            .filter(Page.parent_id == database_id)
            .order_by(Page.position.asc(), Page.created_at.asc())
            .all()
        )
        if not pages:
            return []
        values = (
            self.db.query(PropertyValue)
            .filter(PropertyValue.page_id.in_([p.id for p in pages]))
            .all()
        )
        by_page: Dict[str, List[PropertyValue]] = {}
        for v in values:
            by_page.setdefault(v.page_id, []).append(v)
        return [row_from_orm(p, by_page.get(p.id, [])) for p in pages]

    def load_views(self, database_id: str) -> List[View]:
        rows = (
            self.db.query(DatabaseView)
            .filter(DatabaseView.database_id == database_id)
            .order_by(DatabaseView.position.asc())
            .all()
        )
        return [view_from_orm(v) for v in rows]

    def load_query(self, database_id: str) -> QueryState:
        qs = self.db.get(DatabaseQueryState, database_id)
        if qs is None:
            return QueryState()
        return QueryState(
            filters=[Filter(**f) for f in qs.filters_json or []],
            sorts=[SortLevel(**s) for s in qs.sorts_json or []],
            active_view_id=qs.active_view_id,
        )

    # ---- Columns ----

    def _column(self, column_id: str) -> DatabaseColumn:
        col = self.db.get(DatabaseColumn, column_id)
        if col is None:
            raise ColumnNotFound(f"Column {column_id} not found")
        return col

    def insert_column(self, database_id: str, column: Column) -> None:
        try:
            self.db.add(
                DatabaseColumn(
                    id=column.id,
                    database_id=database_id,
                    name=column.name,
                    property_type=column.property_type.value,
                    display_order=column.display_order,
                    width=column.width,
                    options=_dump_options(column.options) if column.is_choice else None,
                )
            )
            row_ids = [
                pid for (pid,) in self.db.query(Page.id).filter(Page.parent_id == database_id)
            ]
            for pid in row_ids:
                self.db.add(PropertyValue(page_id=pid, column_id=column.id, value=None))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def update_column(self, column_id: str, **fields: Any) -> None:
        try:
            col = self._column(column_id)
            for key in ("name", "width"):
                if key in fields:
                    setattr(col, key, fields[key])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def delete_column(self, column_id: str) -> None:
        try:
            self.db.delete(self._column(column_id))  # property values cascade
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # ---- Options ----

    def write_options(self, column_id: str, options: List[Option]) -> None:
        try:
            self._column(column_id).options = _dump_options(options)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def delete_option(
        self, column_id: str, options: List[Option], changes: List[PropertyChange]
    ) -> None:
        try:
            self._column(column_id).options = _dump_options(options)
            for ch in changes:
                self._stage_property(ch.row_id, ch.column_id, ch.raw_value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # ---- Rows ----

    def _row(self, row_id: str) -> Page:
        page = self.db.get(Page, row_id)
        if page is None or page.parent_id is None:
            raise RowNotFound(f"Row {row_id} not found")
        return page

    def insert_row(self, database_id: str, row: Row) -> None:
        try:
            position = (
                self.db.query(func.count(Page.id))
                .filter(Page.parent_id == database_id)
                .scalar()
                or 0
            )
            self.db.add(
                Page(
                    id=row.id,
                    parent_id=database_id,
                    page_type="text",
                    name=row.name,
                    icon=row.icon,
                    position=position,
                )
            )
            for prop in row.properties:
                self.db.add(
                    PropertyValue(page_id=row.id, column_id=prop.column_id, value=prop.raw_value)
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def update_row(self, row_id: str, **fields: Any) -> None:
        try:
            page = self._row(row_id)
            for key in ("name", "icon"):
                if key in fields:
                    setattr(page, key, fields[key])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def delete_row(self, row_id: str) -> None:
        try:
            self.db.delete(self._row(row_id))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _stage_property(self, row_id: str, column_id: str, raw_value: Optional[str]) -> None:
        existing = (
            self.db.query(PropertyValue)
            .filter(PropertyValue.page_id == row_id, PropertyValue.column_id == column_id)
            .first()
        )
        if existing:
            existing.value = raw_value
        else:
            self.db.add(PropertyValue(page_id=row_id, column_id=column_id, value=raw_value))

    def write_property(self, row_id: str, column_id: str, raw_value: Optional[str]) -> None:
        try:
            self._row(row_id)
            self._stage_property(row_id, column_id, raw_value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # ---- Views ----

    def _view(self, view_id: str) -> DatabaseView:
        v = self.db.get(DatabaseView, view_id)
        if v is None:
            raise ViewNotFound(f"View {view_id} not found")
        return v

    def insert_view(self, database_id: str, view: View, position: int) -> None:
        try:
            self.db.add(
                DatabaseView(
                    id=view.id,
                    database_id=database_id,
                    name=view.name,
                    view_type=view.type.value,
                    position=position,
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def update_view(self, view_id: str, **fields: Any) -> None:
        try:
            v = self._view(view_id)
            if "name" in fields:
                v.name = fields["name"]
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def delete_view(self, view_id: str) -> None:
        try:
            v = self._view(view_id)
            qs = self.db.get(DatabaseQueryState, v.database_id)
            self.db.delete(v)
            self.db.flush()
            if qs is not None and qs.active_view_id == view_id:
                first = (
                    self.db.query(DatabaseView)
                    .filter(DatabaseView.database_id == v.database_id)
                    .order_by(DatabaseView.position.asc())
                    .first()
                )
                qs.active_view_id = first.id if first else None
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def save_query(self, database_id: str, query: QueryState) -> None:
        try:
            qs = self.db.get(DatabaseQueryState, database_id)
            if qs is None:
                qs = DatabaseQueryState(database_id=database_id)
                self.db.add(qs)
            qs.filters_json = [f.model_dump(mode="json") for f in query.filters]
            qs.sorts_json = [s.model_dump(mode="json") for s in query.sorts]
            qs.active_view_id = query.active_view_id
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
