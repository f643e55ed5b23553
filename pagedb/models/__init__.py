# File: /pagedb/models/__init__.py | Version: 1.0 | Title: Models Package Exports
from .pages import Page
from .database import DatabaseColumn, DatabaseQueryState, DatabaseView, PropertyValue

__all__ = [
    "Page",
    "DatabaseColumn",
    "PropertyValue",
    "DatabaseView",
    "DatabaseQueryState",
]
