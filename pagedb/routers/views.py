# File: /pagedb/routers/views.py | Version: 1.0 | Title: Views, shared query state, and projection
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from pagedb.core.config import settings
from pagedb.dependencies import get_state
from pagedb.engine.datastore import QueryState
from pagedb.engine.schema import View
from pagedb.engine.state import DatabaseState
from pagedb.schemas import query as schema_query
from pagedb.schemas import views as schema

router = APIRouter(prefix="/databases/{database_id}", tags=["Views"])


# ----------------------------
# Views CRUD
# ----------------------------
@router.get("/views", response_model=List[View])
def list_views(state: DatabaseState = Depends(get_state)):
    return state.views


@router.post("/views", response_model=View)
def create_view(data: schema.ViewCreate, state: DatabaseState = Depends(get_state)):
    return state.add_view(data.type, data.name)


@router.patch("/views/{view_id}", response_model=View)
def rename_view(
    view_id: str,
    data: schema.ViewUpdate,
    state: DatabaseState = Depends(get_state),
):
    return state.rename_view(view_id, data.name)


@router.delete("/views/{view_id}")
def delete_view(view_id: str, state: DatabaseState = Depends(get_state)):
    state.delete_view(view_id)
    return {"detail": "View deleted", "active_view_id": state.query.active_view_id}


@router.post("/views/{view_id}/activate", response_model=QueryState)
def activate_view(view_id: str, state: DatabaseState = Depends(get_state)):
    state.set_active_view(view_id)
    return state.query


# ----------------------------
# APPLY: filter -> sort -> project
# ----------------------------
@router.get(
    "/views/{view_id}/projection",
    response_model=schema.ProjectionOut,
    summary="Project the database rows through one view",
)
def project_view(view_id: str, state: DatabaseState = Depends(get_state)):
    return state.project(view_id, **settings.projection_limits())


# ----------------------------
# Shared filters / sorts (one set per database, not per view)
# ----------------------------
@router.get("/query", response_model=QueryState)
def get_query(state: DatabaseState = Depends(get_state)):
    return state.query


@router.put("/query", response_model=QueryState)
def update_query(
    data: schema_query.QueryUpdate,
    state: DatabaseState = Depends(get_state),
):
    return state.set_query(filters=data.filters, sorts=data.sorts)


@router.post("/query/sorts", response_model=QueryState)
def add_sort_level(state: DatabaseState = Depends(get_state)):
    """Add an ascending sort on the next unused column (Title first)."""
    return state.add_sort_level()
