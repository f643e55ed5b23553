# File: /pagedb/engine/datastore.py | Version: 1.0 | Title: Persistence collaborator contract
from __future__ import annotations

from typing import Any, List, Optional, Protocol

from pydantic import BaseModel, Field

from pagedb.engine.options import PropertyChange
from pagedb.engine.schema import Column, Filter, Option, Row, SortLevel, View


class QueryState(BaseModel):
    """Filters and sorts shared by every view of one database."""

    filters: List[Filter] = Field(default_factory=list)
    sorts: List[SortLevel] = Field(default_factory=list)
    active_view_id: Optional[str] = None


class Datastore(Protocol):
    # ---- Ingest (wholesale snapshots) ----
    def load_schema(self, database_id: str) -> List[Column]: ...

    def load_rows(self, database_id: str) -> List[Row]: ...

    def load_views(self, database_id: str) -> List[View]: ...

    def load_query(self, database_id: str) -> QueryState: ...

    # ---- Columns ----
    def insert_column(self, database_id: str, column: Column) -> None: ...

    def update_column(self, column_id: str, **fields: Any) -> None: ...

    def delete_column(self, column_id: str) -> None: ...

    # ---- Options ----
    def write_options(self, column_id: str, options: List[Option]) -> None: ...

    def delete_option(
        self, column_id: str, options: List[Option], changes: List[PropertyChange]
    ) -> None: ...

    # ---- Rows ----
    def insert_row(self, database_id: str, row: Row) -> None: ...

    def update_row(self, row_id: str, **fields: Any) -> None: ...

    def delete_row(self, row_id: str) -> None: ...

    def write_property(self, row_id: str, column_id: str, raw_value: Optional[str]) -> None: ...

    # ---- Views & query ----
    def insert_view(self, database_id: str, view: View, position: int) -> None: ...

    def update_view(self, view_id: str, **fields: Any) -> None: ...

    def delete_view(self, view_id: str) -> None: ...

    def save_query(self, database_id: str, query: QueryState) -> None: ...
