# File: /pagedb/models/database.py | Version: 1.0 | Title: Database columns, property values, views and shared query
from __future__ import annotations

from typing import Any, List as TList, Optional

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagedb.db.base_class import Base
from pagedb.models.pages import Page, gen_uuid


class DatabaseColumn(Base):
    __tablename__ = "database_column"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    database_id: Mapped[str] = mapped_column(ForeignKey("page.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    property_type: Mapped[str] = mapped_column(String(20), nullable=False)  # fixed after creation
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    width: Mapped[Optional[int]] = mapped_column(Integer)
    # [{"id": ..., "label": ..., "color": ...}] for select / multi_select
    options: Mapped[Optional[TList[dict[str, Any]]]] = mapped_column(JSON)

    database: Mapped["Page"] = relationship(back_populates="columns")
    values: Mapped[TList["PropertyValue"]] = relationship(back_populates="column", cascade="all, delete-orphan")


class PropertyValue(Base):
    __tablename__ = "property_value"
    __table_args__ = (UniqueConstraint("page_id", "column_id", name="uq_property_value_page_column"),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    page_id: Mapped[str] = mapped_column(ForeignKey("page.id"), index=True, nullable=False)
    column_id: Mapped[str] = mapped_column(ForeignKey("database_column.id"), index=True, nullable=False)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    page: Mapped["Page"] = relationship(back_populates="properties")
    column: Mapped["DatabaseColumn"] = relationship(back_populates="values")


class DatabaseView(Base):
    __tablename__ = "database_view"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    database_id: Mapped[str] = mapped_column(ForeignKey("page.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    view_type: Mapped[str] = mapped_column(String(20), default="table", nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class DatabaseQueryState(Base):
    """One row per database: filters and sorts shared by all of its views."""

    __tablename__ = "database_query_state"
    database_id: Mapped[str] = mapped_column(ForeignKey("page.id"), primary_key=True)
    filters_json: Mapped[Optional[TList[dict[str, Any]]]] = mapped_column(JSON)
    sorts_json: Mapped[Optional[TList[dict[str, Any]]]] = mapped_column(JSON)
    active_view_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)


Index("ix_database_view_database_position", DatabaseView.database_id, DatabaseView.position)
