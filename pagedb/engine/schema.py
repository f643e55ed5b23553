# File: /pagedb/engine/schema.py | Version: 1.0 | Title: Column/Row data model shared by the engine
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


def gen_id() -> str:
    return str(uuid4())


class PropertyType(str, Enum):
    text = "text"
    number = "number"
    checkbox = "checkbox"
    date = "date"
    url = "url"
    select = "select"
    multi_select = "multi_select"


CHOICE_TYPES = {PropertyType.select, PropertyType.multi_select}

PROPERTY_TYPE_LABELS: Dict[PropertyType, str] = {
    PropertyType.text: "Text",
    PropertyType.number: "Number",
    PropertyType.checkbox: "Checkbox",
    PropertyType.date: "Date",
    PropertyType.url: "URL",
    PropertyType.select: "Select",
    PropertyType.multi_select: "Multi-select",
}


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class FilterOperator(str, Enum):
    is_ = "is"
    is_not = "is_not"
    contains = "contains"
    does_not_contain = "does_not_contain"
    starts_with = "starts_with"
    ends_with = "ends_with"
    is_empty = "is_empty"
    is_not_empty = "is_not_empty"


OPERATOR_LABELS: Dict[FilterOperator, str] = {
    FilterOperator.is_: "is",
    FilterOperator.is_not: "is not",
    FilterOperator.contains: "contains",
    FilterOperator.does_not_contain: "does not contain",
    FilterOperator.starts_with: "starts with",
    FilterOperator.ends_with: "ends with",
    FilterOperator.is_empty: "is empty",
    FilterOperator.is_not_empty: "is not empty",
}


def operator_needs_value(op: FilterOperator) -> bool:
    return op not in (FilterOperator.is_empty, FilterOperator.is_not_empty)


class ViewType(str, Enum):
    table = "table"
    board = "board"
    gallery = "gallery"
    list = "list"


VIEW_TYPE_LABELS: Dict[ViewType, str] = {
    ViewType.table: "Table",
    ViewType.board: "Board",
    ViewType.gallery: "Gallery",
    ViewType.list: "List",
}


# The Title pseudo-column reads row.name; it is never stored as a Column.
TITLE_COLUMN_ID = "title"
TITLE_COLUMN_NAME = "Title"


def is_title_column(column_id: Optional[str]) -> bool:
    return (column_id or "").strip().lower() == TITLE_COLUMN_ID


# ---- Entities ----


class Option(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=gen_id)
    label: str
    color: str


class Column(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=gen_id)
    name: str
    property_type: PropertyType
    display_order: int = 0
    width: Optional[int] = None
    options: Optional[List[Option]] = None

    @model_validator(mode="after")
    def _options_only_for_choices(self) -> "Column":
        if self.property_type in CHOICE_TYPES:
            if self.options is None:
                self.options = []
        else:
            self.options = None
        return self

    @property
    def is_choice(self) -> bool:
        return self.property_type in CHOICE_TYPES

    def find_option(self, option_id: Optional[str]) -> Optional[Option]:
        if not option_id:
            return None
        for opt in self.options or []:
            if opt.id == option_id:
                return opt
        return None


class PropertyValue(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    column_id: str
    raw_value: Optional[str] = None


class Row(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=gen_id)
    name: str = ""
    icon: Optional[str] = None
    properties: List[PropertyValue] = Field(default_factory=list)

    def raw_value(self, column_id: str) -> Optional[str]:
        for prop in self.properties:
            if prop.column_id == column_id:
                return prop.raw_value
        return None

    def with_value(self, column_id: str, raw: Optional[str]) -> "Row":
        """Copy of this row with one property replaced (or appended)."""
        new_prop = PropertyValue(column_id=column_id, raw_value=raw)
        out: List[PropertyValue] = []
        replaced = False
        for p in self.properties:
            if p.column_id == column_id:
                out.append(new_prop)
                replaced = True
            else:
                out.append(p)
        if not replaced:
            out.append(new_prop)
        return self.model_copy(update={"properties": out})


class SortLevel(BaseModel):
    id: str = Field(default_factory=gen_id)
    column_id: str
    direction: SortDirection = SortDirection.asc


class Filter(BaseModel):
    id: str = Field(default_factory=gen_id)
    column_id: str
    operator: FilterOperator
    value: str = ""


class View(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=gen_id)
    name: str
    type: ViewType = ViewType.table


def title_column() -> Column:
    return Column(
        id=TITLE_COLUMN_ID,
        name=TITLE_COLUMN_NAME,
        property_type=PropertyType.text,
        display_order=-1,
    )


def ensure_properties(row: Row, columns: List[Column]) -> Row:
    """Give the row one (possibly empty) PropertyValue per column."""
    have = {p.column_id for p in row.properties}
    missing = [PropertyValue(column_id=c.id) for c in columns if c.id not in have]
    if not missing:
        return row
    return row.model_copy(update={"properties": list(row.properties) + missing})


def columns_by_id(columns: List[Column]) -> Dict[str, Column]:
    return {c.id: c for c in columns}
