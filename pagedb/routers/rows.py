# File: /pagedb/routers/rows.py | Version: 1.0 | Title: Rows + property values
from __future__ import annotations

from fastapi import APIRouter, Depends

from pagedb.dependencies import get_state
from pagedb.engine.schema import Row
from pagedb.engine.state import DatabaseState
from pagedb.schemas import rows as schema

router = APIRouter(prefix="/databases/{database_id}", tags=["Rows"])


@router.post("/rows", response_model=Row)
def add_row(data: schema.RowCreate, state: DatabaseState = Depends(get_state)):
    return state.add_row(data.name.strip(), data.icon)


@router.patch("/rows/{row_id}", response_model=Row)
def update_row(
    row_id: str,
    data: schema.RowUpdate,
    state: DatabaseState = Depends(get_state),
):
    row = state.row(row_id)
    # blank names are ignored rather than clearing the title
    if data.name is not None and data.name.strip():
        row = state.rename_row(row_id, data.name.strip())
    if "icon" in data.model_fields_set:
        row = state.set_row_icon(row_id, data.icon)
    return row


@router.delete("/rows/{row_id}")
def delete_row(row_id: str, state: DatabaseState = Depends(get_state)):
    state.delete_row(row_id)
    return {"detail": "Row deleted"}


@router.put("/rows/{row_id}/properties/{column_id}", response_model=Row)
def set_property(
    row_id: str,
    column_id: str,
    data: schema.PropertyValueUpdate,
    state: DatabaseState = Depends(get_state),
):
    return state.set_property(row_id, column_id, data.value)


@router.post("/rows/{row_id}/properties/{column_id}/toggle", response_model=Row)
def toggle_checkbox(
    row_id: str,
    column_id: str,
    state: DatabaseState = Depends(get_state),
):
    return state.toggle_checkbox(row_id, column_id)


@router.post("/board/move", response_model=Row)
def move_row_on_board(data: schema.BoardMove, state: DatabaseState = Depends(get_state)):
    return state.move_row_to_bucket(data.row_id, data.target)
