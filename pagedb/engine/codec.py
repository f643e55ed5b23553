# File: /pagedb/engine/codec.py | Version: 1.0 | Title: Value codec (raw string <-> typed property values)
"""
Every property value is persisted as a string (or null); the column's
property_type says how to read it. Decoding never raises: malformed data
reads as absent. Validation only happens on write (``normalize_input``).
"""
from __future__ import annotations

import json
import re
from datetime import date, datetime
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from pagedb.engine.errors import InvalidColumnType, InvalidPropertyValue
from pagedb.engine.schema import Column, Option, PropertyType

CHECKED = "true"
UNCHECKED = "false"

NUMBER_INPUT_RE = re.compile(r"^-?\d*\.?\d*$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_EMPTY_RAWS = {"", "[]"}


# ---- Decoded (tagged) values ----


class TextValue(BaseModel):
    kind: Literal["text"] = "text"
    text: str = ""


class UrlValue(BaseModel):
    kind: Literal["url"] = "url"
    url: str = ""


class NumberValue(BaseModel):
    kind: Literal["number"] = "number"
    text: str = ""

    @property
    def number(self) -> float:
        return parse_number(self.text)


class CheckboxValue(BaseModel):
    kind: Literal["checkbox"] = "checkbox"
    checked: bool = False


class DateValue(BaseModel):
    kind: Literal["date"] = "date"
    value: Optional[date] = None


class SelectValue(BaseModel):
    kind: Literal["select"] = "select"
    option_id: Optional[str] = None


class MultiSelectValue(BaseModel):
    kind: Literal["multi_select"] = "multi_select"
    option_ids: List[str] = Field(default_factory=list)


DecodedValue = Annotated[
    Union[
        TextValue,
        UrlValue,
        NumberValue,
        CheckboxValue,
        DateValue,
        SelectValue,
        MultiSelectValue,
    ],
    Field(discriminator="kind"),
]


# ---- Primitive helpers ----


def is_empty(raw: Optional[str]) -> bool:
    return raw is None or raw in _EMPTY_RAWS


def is_checked(raw: Optional[str]) -> bool:
    return raw == CHECKED


def toggle_checkbox(raw: Optional[str]) -> str:
    return UNCHECKED if is_checked(raw) else CHECKED


def is_valid_number_input(text: str) -> bool:
    return bool(NUMBER_INPUT_RE.match(text or ""))


def parse_number(raw: Optional[str]) -> float:
    """Transient numeric form used for sorting; anything unparsable is 0."""
    if not raw:
        return 0.0
    try:
        val = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if val != val:  # NaN
        return 0.0
    return val


def parse_date(raw: Optional[str]) -> Optional[date]:
    if not raw or not ISO_DATE_RE.match(raw):
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        return None


_EPOCH = date(1970, 1, 1)


def epoch_ms(d: Optional[date]) -> int:
    """Milliseconds since the epoch at midnight UTC; a missing date is 0."""
    if d is None:
        return 0
    return (d - _EPOCH).days * 86_400_000


def date_epoch_ms(raw: Optional[str]) -> int:
    return epoch_ms(parse_date(raw))


def parse_multi_select(raw: Optional[str]) -> List[str]:
    if is_empty(raw):
        return []
    try:
        data = json.loads(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return []
    if not isinstance(data, list):
        return []
    return [x for x in data if isinstance(x, str)]


def encode_multi_select(option_ids: List[str]) -> Optional[str]:
    if not option_ids:
        return None
    return json.dumps(list(option_ids))


# ---- decode / encode ----


def decode(column: Column, raw: Optional[str]) -> DecodedValue:
    pt = column.property_type
    if pt == PropertyType.checkbox:
        return CheckboxValue(checked=is_checked(raw))
    if pt == PropertyType.number:
        return NumberValue(text=raw or "")
    if pt == PropertyType.url:
        return UrlValue(url=raw or "")
    if pt == PropertyType.date:
        return DateValue(value=parse_date(raw))
    if pt == PropertyType.select:
        return SelectValue(option_id=raw or None)
    if pt == PropertyType.multi_select:
        return MultiSelectValue(option_ids=parse_multi_select(raw))
    return TextValue(text=raw or "")


def encode(value: DecodedValue) -> Optional[str]:
    if isinstance(value, CheckboxValue):
        return CHECKED if value.checked else UNCHECKED
    if isinstance(value, NumberValue):
        return value.text or None
    if isinstance(value, UrlValue):
        return value.url or None
    if isinstance(value, DateValue):
        return value.value.isoformat() if value.value else None
    if isinstance(value, SelectValue):
        return value.option_id or None
    if isinstance(value, MultiSelectValue):
        return encode_multi_select(value.option_ids)
    return value.text or None


# ---- Option resolution ----


def resolve_option(column: Column, option_id: Optional[str]) -> Optional[Option]:
    """Dangling ids resolve to None (displayed as empty), but are not cleaned."""
    return column.find_option(option_id)


def resolve_options(column: Column, option_ids: List[str]) -> List[Option]:
    out: List[Option] = []
    for oid in option_ids:
        opt = column.find_option(oid)
        if opt is not None:
            out.append(opt)
    return out


# ---- Display forms ----


def display_text(column: Column, raw: Optional[str]) -> str:
    """String form that filters compare against."""
    value = decode(column, raw)
    if isinstance(value, CheckboxValue):
        return CHECKED if value.checked else UNCHECKED
    if isinstance(value, SelectValue):
        opt = resolve_option(column, value.option_id)
        return opt.label if opt else ""
    if isinstance(value, MultiSelectValue):
        return ", ".join(o.label for o in resolve_options(column, value.option_ids))
    return raw or ""


def format_value(column: Column, raw: Optional[str]) -> str:
    """Presentation form for cards and list rows."""
    value = decode(column, raw)
    if isinstance(value, CheckboxValue):
        return "✓" if value.checked else ""
    if isinstance(value, DateValue):
        d = value.value
        if d is None:
            return raw or ""
        return f"{d.strftime('%b')} {d.day}, {d.year}"
    return display_text(column, raw)


# ---- Write-time validation ----


def normalize_input(column: Column, value: Any) -> Optional[str]:
    """Validate an incoming edit and return the raw string to persist."""
    pt = column.property_type

    if value is None:
        return None

    if pt == PropertyType.multi_select:
        if isinstance(value, str):
            if value.strip() == "":
                return None
            try:
                value = json.loads(value)
            except ValueError:
                raise InvalidPropertyValue("multi_select value must be a JSON array")
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise InvalidPropertyValue("multi_select value must be a list of option ids")
        unknown = [v for v in value if column.find_option(v) is None]
        if unknown:
            raise InvalidPropertyValue(f"Unknown option id(s): {', '.join(unknown)}")
        # keep first occurrence order, drop duplicates
        return encode_multi_select(list(dict.fromkeys(value)))

    if pt == PropertyType.checkbox and isinstance(value, bool):
        return CHECKED if value else UNCHECKED

    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise InvalidPropertyValue(f"{pt.value} value must be a string")
    text = str(value)

    if pt == PropertyType.number:
        if not is_valid_number_input(text):
            raise InvalidPropertyValue(f"'{text}' is not a valid number")
        return text or None
    if pt == PropertyType.date:
        if text == "":
            return None
        if parse_date(text) is None:
            raise InvalidPropertyValue("date must be formatted YYYY-MM-DD")
        return text
    if pt == PropertyType.checkbox:
        return CHECKED if text == CHECKED else UNCHECKED
    if pt == PropertyType.select:
        if text == "":
            return None
        if column.find_option(text) is None:
            raise InvalidPropertyValue(f"Unknown option id: {text}")
        return text
    return text


def require_checkbox(column: Column) -> None:
    if column.property_type != PropertyType.checkbox:
        raise InvalidColumnType(f"Column '{column.name}' is not a checkbox column")
