from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from pagedb.engine.schema import PropertyType


# ---- Columns ----


class ColumnCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    property_type: PropertyType
    width: Optional[int] = Field(default=None, ge=40, le=2000)


class ColumnUpdate(BaseModel):
    # property_type is fixed after creation
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    width: Optional[int] = Field(default=None, ge=40, le=2000)


# ---- Options ----


def _clean_label(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Option label cannot be blank")
    return value


class OptionCreate(BaseModel):
    label: str = Field(min_length=1, max_length=100)
    color: Optional[str] = None

    @field_validator("label")
    @classmethod
    def strip_label(cls, value: Optional[str]) -> Optional[str]:
        return _clean_label(value)


class OptionUpdate(BaseModel):
    label: Optional[str] = Field(default=None, min_length=1, max_length=100)
    color: Optional[str] = None

    @field_validator("label")
    @classmethod
    def strip_label(cls, value: Optional[str]) -> Optional[str]:
        return _clean_label(value)


class OptionReorder(BaseModel):
    option_ids: List[str]
