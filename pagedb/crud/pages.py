# File: /pagedb/crud/pages.py | Version: 1.0 | Title: Page CRUD (text pages + database pages)
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from pagedb.engine.schema import VIEW_TYPE_LABELS, ViewType
from pagedb.models import DatabaseQueryState, DatabaseView, Page


def create_page(db: Session, data) -> Page:
    """
    data: schemas.pages.PageCreate

    Database pages start with one Table view (active) and an empty query.
    """
    try:
        page = Page(
            name=data.name,
            page_type=data.page_type,
            icon=data.icon,
            content=data.content if data.page_type == "text" else None,
        )
        db.add(page)
        db.flush()

        if page.page_type == "database":
            view = DatabaseView(
                database_id=page.id,
                name=VIEW_TYPE_LABELS[ViewType.table],
                view_type=ViewType.table.value,
                position=0,
            )
            db.add(view)
            db.flush()
            db.add(
                DatabaseQueryState(
                    database_id=page.id,
                    filters_json=[],
                    sorts_json=[],
                    active_view_id=view.id,
                )
            )
        db.commit()
        db.refresh(page)
        return page
    except Exception:
        db.rollback()
        raise


def get_page(db: Session, page_id: str) -> Optional[Page]:
    return db.query(Page).filter(Page.id == str(page_id)).first()


def get_database(db: Session, database_id: str) -> Optional[Page]:
    return (
        db.query(Page)
        .filter(Page.id == str(database_id), Page.page_type == "database")
        .first()
    )


def list_pages(db: Session, *, top_level_only: bool = True) -> List[Page]:
    q = db.query(Page)
    if top_level_only:
        q = q.filter(Page.parent_id.is_(None))
    return q.order_by(Page.created_at.asc()).all()


def update_page(db: Session, page: Page, data) -> Page:
    try:
        if getattr(data, "name", None) is not None:
            page.name = data.name
        if getattr(data, "icon", None) is not None:
            page.icon = data.icon
        if getattr(data, "content", None) is not None and page.page_type == "text":
            page.content = data.content
        db.commit()
        db.refresh(page)
        return page
    except Exception:
        db.rollback()
        raise


def delete_page(db: Session, page: Page) -> bool:
    try:
        if page.page_type == "database":
            db.query(DatabaseView).filter(DatabaseView.database_id == page.id).delete()
            db.query(DatabaseQueryState).filter(
                DatabaseQueryState.database_id == page.id
            ).delete()
        db.delete(page)
        db.commit()
        return True
    except Exception:
        db.rollback()
        raise
