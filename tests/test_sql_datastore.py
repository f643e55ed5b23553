# File: /tests/test_sql_datastore.py | Version: 1.0 | Title: SqlDatastore transactions roll back as a whole
import pytest
from conftest import TestingSessionLocal

from pagedb.crud import pages as crud_pages
from pagedb.crud.datastore import SqlDatastore
from pagedb.engine.errors import ViewNotFound
from pagedb.engine.options import PropertyChange
from pagedb.engine.schema import Column, Option, PropertyType
from pagedb.models import DatabaseColumn
from pagedb.schemas.pages import PageCreate


@pytest.fixture()
def session():
    s = TestingSessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def database(session):
    page = crud_pages.create_page(session, PageCreate(name="Tx", page_type="database"))
    try:
        yield page
    finally:
        session.rollback()
        crud_pages.delete_page(session, crud_pages.get_page(session, page.id))


def test_failure_while_staging_rolls_back_option_write(session, database, monkeypatch):
    store = SqlDatastore(session)
    column = Column(
        name="Status",
        property_type=PropertyType.select,
        options=[Option(id="o1", label="Todo", color="#93c5fd")],
    )
    store.insert_column(database.id, column)

    def _boom(*_args, **_kwargs):
        raise RuntimeError("staging failed")

    monkeypatch.setattr(store, "_stage_property", _boom)
    with pytest.raises(RuntimeError):
        store.delete_option(column.id, [], [PropertyChange("r1", column.id, None)])

    assert not session.dirty and not session.new
    stored = session.get(DatabaseColumn, column.id)
    assert [o["id"] for o in stored.options] == ["o1"]


def test_missing_view_leaves_session_clean(session, database):
    store = SqlDatastore(session)
    with pytest.raises(ViewNotFound):
        store.delete_view("nope")
    assert not session.dirty and not session.new
    assert [v.name for v in store.load_views(database.id)] == ["Table"]
