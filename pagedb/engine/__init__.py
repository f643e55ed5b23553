# File: /pagedb/engine/__init__.py | Version: 1.0 | Title: Typed-property data engine (pure, no I/O)
from .errors import (
    InvalidColumnType,
    InvalidPropertyValue,
    InvalidReorder,
    NoGroupColumn,
    PageDBError,
    PersistenceError,
)
from .schema import (
    Column,
    Filter,
    FilterOperator,
    Option,
    PropertyType,
    PropertyValue,
    Row,
    SortDirection,
    SortLevel,
    View,
    ViewType,
)

__all__ = [
    "Column",
    "Filter",
    "FilterOperator",
    "Option",
    "PropertyType",
    "PropertyValue",
    "Row",
    "SortDirection",
    "SortLevel",
    "View",
    "ViewType",
    "PageDBError",
    "InvalidReorder",
    "NoGroupColumn",
    "InvalidColumnType",
    "InvalidPropertyValue",
    "PersistenceError",
]
