# File: /pagedb/routers/columns.py | Version: 1.0 | Title: Columns + option registry
from __future__ import annotations

from fastapi import APIRouter, Depends

from pagedb.dependencies import get_state
from pagedb.engine.schema import Column, Option
from pagedb.engine.state import DatabaseState
from pagedb.schemas import columns as schema

router = APIRouter(prefix="/databases/{database_id}/columns", tags=["Columns"])


# ----- COLUMNS -----


@router.post("", response_model=Column)
def add_column(data: schema.ColumnCreate, state: DatabaseState = Depends(get_state)):
    return state.add_column(data.name, data.property_type, width=data.width)


@router.patch("/{column_id}", response_model=Column)
def update_column(
    column_id: str,
    data: schema.ColumnUpdate,
    state: DatabaseState = Depends(get_state),
):
    column = state.column(column_id)
    if data.name is not None:
        column = state.rename_column(column_id, data.name)
    if "width" in data.model_fields_set:
        column = state.resize_column(column_id, data.width)
    return column


@router.delete("/{column_id}")
def delete_column(column_id: str, state: DatabaseState = Depends(get_state)):
    state.delete_column(column_id)
    return {"detail": "Column deleted"}


# ----- OPTIONS -----


@router.post("/{column_id}/options", response_model=Option)
def create_option(
    column_id: str,
    data: schema.OptionCreate,
    state: DatabaseState = Depends(get_state),
):
    return state.create_option(column_id, data.label, data.color)


@router.patch("/{column_id}/options/{option_id}", response_model=Column)
def update_option(
    column_id: str,
    option_id: str,
    data: schema.OptionUpdate,
    state: DatabaseState = Depends(get_state),
):
    column = state.column(column_id)
    if data.label is not None:
        column = state.rename_option(column_id, option_id, data.label)
    if data.color is not None:
        column = state.recolor_option(column_id, option_id, data.color)
    return column


@router.delete("/{column_id}/options/{option_id}", response_model=Column)
def delete_option(
    column_id: str,
    option_id: str,
    state: DatabaseState = Depends(get_state),
):
    return state.delete_option(column_id, option_id)


@router.put("/{column_id}/options", response_model=Column)
def reorder_options(
    column_id: str,
    data: schema.OptionReorder,
    state: DatabaseState = Depends(get_state),
):
    return state.reorder_options(column_id, data.option_ids)
