# File: /pagedb/routers/pages.py | Version: 1.0 | Title: Pages + database snapshot
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pagedb.crud import pages as crud_pages
from pagedb.db.session import get_db
from pagedb.dependencies import get_state
from pagedb.engine.errors import PageNotFound
from pagedb.engine.state import DatabaseState
from pagedb.schemas import pages as schema

router = APIRouter(tags=["Pages"])


# ----- PAGE ROUTES -----


@router.post("/pages", response_model=schema.PageOut)
def create_page(data: schema.PageCreate, db: Session = Depends(get_db)):
    return crud_pages.create_page(db, data)


@router.get("/pages", response_model=List[schema.PageOut])
def list_pages(db: Session = Depends(get_db)):
    return crud_pages.list_pages(db)


@router.get("/pages/{page_id}", response_model=schema.PageOut)
def get_page(page_id: str, db: Session = Depends(get_db)):
    page = crud_pages.get_page(db, page_id)
    if not page:
        raise PageNotFound(f"Page {page_id} not found")
    return page


@router.patch("/pages/{page_id}", response_model=schema.PageOut)
def update_page(page_id: str, data: schema.PageUpdate, db: Session = Depends(get_db)):
    page = crud_pages.get_page(db, page_id)
    if not page:
        raise PageNotFound(f"Page {page_id} not found")
    return crud_pages.update_page(db, page, data)


@router.delete("/pages/{page_id}")
def delete_page(page_id: str, db: Session = Depends(get_db)):
    page = crud_pages.get_page(db, page_id)
    if not page:
        raise PageNotFound(f"Page {page_id} not found")
    crud_pages.delete_page(db, page)
    return {"detail": "Page deleted"}


# ----- DATABASE SNAPSHOT -----


@router.get("/databases/{database_id}", response_model=schema.DatabaseSnapshot)
def get_database(
    database_id: str,
    state: DatabaseState = Depends(get_state),
    db: Session = Depends(get_db),
):
    page = crud_pages.get_database(db, database_id)
    return schema.DatabaseSnapshot(
        id=database_id,
        name=page.name,
        columns=state.columns,
        rows=state.rows,
        views=state.views,
        query=state.query,
    )
