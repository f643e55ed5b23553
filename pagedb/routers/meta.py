# File: /pagedb/routers/meta.py | Version: 1.0 | Title: Static vocab for clients (types, operators, colors)
from __future__ import annotations

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from pagedb.engine.options import OPTION_COLORS, is_light_color
from pagedb.engine.schema import (
    OPERATOR_LABELS,
    PROPERTY_TYPE_LABELS,
    VIEW_TYPE_LABELS,
    operator_needs_value,
)

router = APIRouter(prefix="/meta", tags=["Meta"])


class LabelOut(BaseModel):
    value: str
    label: str


class OperatorOut(LabelOut):
    needs_value: bool


class ColorOut(BaseModel):
    name: str
    hex: str
    is_light: bool


@router.get("/property-types", response_model=List[LabelOut])
def property_types():
    return [LabelOut(value=t.value, label=label) for t, label in PROPERTY_TYPE_LABELS.items()]


@router.get("/filter-operators", response_model=List[OperatorOut])
def filter_operators():
    return [
        OperatorOut(value=op.value, label=label, needs_value=operator_needs_value(op))
        for op, label in OPERATOR_LABELS.items()
    ]


@router.get("/view-types", response_model=List[LabelOut])
def view_types():
    return [LabelOut(value=t.value, label=label) for t, label in VIEW_TYPE_LABELS.items()]


@router.get("/option-colors", response_model=List[ColorOut])
def option_colors():
    return [ColorOut(name=name, hex=hex_, is_light=is_light_color(hex_)) for hex_, name in OPTION_COLORS]
