# File: /pagedb/schemas/pages.py | Version: 1.0
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pagedb.engine.datastore import QueryState
from pagedb.engine.schema import Column, Row, View

PageType = Literal["text", "database"]


class PageCreate(BaseModel):
    name: str = Field(default="Untitled", max_length=255)
    page_type: PageType = "text"
    icon: Optional[str] = Field(default=None, max_length=64)
    content: Optional[str] = None


class PageUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=64)
    content: Optional[str] = None


class PageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    page_type: str
    icon: Optional[str] = None
    content: Optional[str] = None
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DatabaseSnapshot(BaseModel):
    id: str
    name: str
    columns: List[Column]
    rows: List[Row]
    views: List[View]
    query: QueryState
