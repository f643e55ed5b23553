# File: /pagedb/dependencies.py | Version: 1.0 | Path: /pagedb/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from pagedb.core.config import settings
from pagedb.crud import pages as crud_pages
from pagedb.crud.datastore import SqlDatastore
from pagedb.db.session import get_db
from pagedb.engine.errors import PageNotFound
from pagedb.engine.state import DatabaseState


def get_state(database_id: str, db: Session = Depends(get_db)) -> DatabaseState:
    """Fresh snapshot of one database, re-read wholesale on every request."""
    if crud_pages.get_database(db, database_id) is None:
        raise PageNotFound(f"Database {database_id} not found")
    return DatabaseState.load(
        SqlDatastore(db),
        database_id,
        color_policy=settings.OPTION_COLOR_POLICY,
    )
