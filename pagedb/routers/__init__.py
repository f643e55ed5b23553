# File: /pagedb/routers/__init__.py | Version: 1.0 | Path: /pagedb/routers/__init__.py
"""
Router package exports.

Keeping these explicit helps static analyzers and avoids surprises
when importing submodules like: `from pagedb.routers import rows as rows_router`.
"""
from . import columns, health, meta, pages, rows, views

__all__ = ["columns", "health", "meta", "pages", "rows", "views"]
