# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys

# Make repo root importable as "pagedb"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pagedb.db import Base
from pagedb.engine.schema import Column, Option, PropertyType, PropertyValue, Row
from pagedb.main import app

TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    connection = engine.connect()
    trans = connection.begin()
    try:
        session = TestingSessionLocal(bind=connection)
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(db_session):
    from pagedb.db.session import get_db  # late import to avoid circulars

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---- In-memory engine fixtures (no DB) ----


@pytest.fixture()
def status_column() -> Column:
    return Column(
        id="status",
        name="Status",
        property_type=PropertyType.select,
        display_order=1,
        options=[
            Option(id="o1", label="Todo", color="#93c5fd"),
            Option(id="o2", label="Done", color="#86efac"),
        ],
    )


@pytest.fixture()
def tags_column() -> Column:
    return Column(
        id="tags",
        name="Tags",
        property_type=PropertyType.multi_select,
        display_order=2,
        options=[
            Option(id="t1", label="Urgent", color="#fca5a5"),
            Option(id="t2", label="Later", color="#e5e5e5"),
        ],
    )


def make_row(row_id: str, name: str = "", **values) -> Row:
    return Row(
        id=row_id,
        name=name or row_id,
        properties=[PropertyValue(column_id=k, raw_value=v) for k, v in values.items()],
    )
