# File: /pagedb/schemas/__init__.py | Version: 1.0 | Path: /pagedb/schemas/__init__.py
from . import columns, pages, query, rows, views

__all__ = ["columns", "pages", "query", "rows", "views"]
