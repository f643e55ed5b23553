from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field


class RowCreate(BaseModel):
    name: str = Field(default="", max_length=255)
    icon: Optional[str] = Field(default=None, max_length=64)


class RowUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=64)


class PropertyValueUpdate(BaseModel):
    # str for most types, bool for checkbox, list of option ids for multi_select
    value: Optional[Union[str, bool, int, float, List[Any]]] = None


class BoardMove(BaseModel):
    row_id: str
    # option id of the target bucket; null (or "__none__") for the catch-all bucket
    target: Optional[str] = None
