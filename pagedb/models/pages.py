# File: /pagedb/models/pages.py | Version: 1.0 | Path: /pagedb/models/pages.py
from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, List as TList, Optional
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagedb.db.base_class import Base

if TYPE_CHECKING:
    from pagedb.models.database import DatabaseColumn, PropertyValue


def gen_uuid() -> str:
    return str(uuid4())


class Page(Base):
    """
    A workspace page. ``page_type`` is 'text' or 'database'; database rows
    are text pages whose ``parent_id`` points at the database page.
    """

    __tablename__ = "page"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    parent_id: Mapped[Optional[str]] = mapped_column(ForeignKey("page.id"), index=True, nullable=True)
    page_type: Mapped[str] = mapped_column(String(20), default="text", nullable=False)
    name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    icon: Mapped[Optional[str]] = mapped_column(String(64))
    content: Mapped[Optional[str]] = mapped_column(Text)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC)
    )

    parent: Mapped[Optional["Page"]] = relationship("Page", remote_side=lambda: [Page.id], back_populates="children")
    children: Mapped[TList["Page"]] = relationship("Page", back_populates="parent", cascade="all, delete-orphan")

    columns: Mapped[TList["DatabaseColumn"]] = relationship(back_populates="database", cascade="all, delete-orphan")
    properties: Mapped[TList["PropertyValue"]] = relationship(back_populates="page", cascade="all, delete-orphan")
