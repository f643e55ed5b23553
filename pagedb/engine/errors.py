# File: /pagedb/engine/errors.py | Version: 1.0 | Title: Engine error taxonomy
from __future__ import annotations


class PageDBError(Exception):
    """Base class for every error the engine surfaces to callers."""

    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


# ---- Structural misuse (caller contract violations) ----


class InvalidReorder(PageDBError):
    status_code = 409


class NoGroupColumn(PageDBError):
    status_code = 409


class InvalidColumnType(PageDBError):
    status_code = 400


class InvalidPropertyValue(PageDBError):
    status_code = 422


# ---- Lookups ----


class NotFoundError(PageDBError):
    status_code = 404


class ColumnNotFound(NotFoundError):
    pass


class RowNotFound(NotFoundError):
    pass


class OptionNotFound(NotFoundError):
    pass


class ViewNotFound(NotFoundError):
    pass


class PageNotFound(NotFoundError):
    pass


# ---- Persistence ----


class PersistenceError(PageDBError):
    """A datastore write failed; in-memory state was left untouched."""

    status_code = 503


class InvalidQuery(PageDBError):
    status_code = 422


class LastViewError(PageDBError):
    """A database must keep at least one view."""

    status_code = 409
