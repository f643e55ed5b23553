# File: /pagedb/schemas/views.py | Version: 1.0 | Title: Pydantic v2 schemas for database views
from __future__ import annotations

from typing import Annotated, Optional, Union

from pydantic import BaseModel, Field

from pagedb.engine.projection import (
    BoardProjection,
    GalleryProjection,
    ListProjection,
    TableProjection,
)
from pagedb.engine.schema import ViewType


class ViewCreate(BaseModel):
    type: ViewType = ViewType.table
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)


class ViewUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


ProjectionOut = Annotated[
    Union[TableProjection, BoardProjection, GalleryProjection, ListProjection],
    Field(discriminator="view_type"),
]
