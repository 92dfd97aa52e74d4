"""Typed cell values and their column descriptors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from common.errors import RenderError

Payload = Union[str, int, float, time, date, datetime]


class FieldType(str, Enum):
    """Logical type a configured column is decoded into."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    TIME = "time"
    DATE = "date"
    DATETIME = "datetime"


class Field(BaseModel):
    """Configured column: source name, display title and logical type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    field: str
    title: str
    kind: FieldType

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        """Accept kind names case-insensitively (``DateTime``, ``string``)."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


@dataclass(frozen=True)
class TypedValue:
    """A decoded, non-null cell value tagged with its logical type."""

    kind: FieldType
    data: Payload

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FieldType(self.kind))
        if not _payload_matches(self.kind, self.data):
            raise TypeError(
                f"{type(self.data).__name__} payload does not match field type {self.kind.value}"
            )
        if self.kind is FieldType.FLOAT and isinstance(self.data, int):
            object.__setattr__(self, "data", float(self.data))
        if self.kind is FieldType.DATETIME and self.data.tzinfo is None:
            object.__setattr__(self, "data", self.data.replace(tzinfo=timezone.utc))

    def to_string(self) -> str:
        """Return the canonical, locale-independent text of the value."""
        if self.kind is FieldType.STRING:
            return self.data
        if self.kind is FieldType.INTEGER:
            return str(self.data)
        if self.kind is FieldType.FLOAT:
            return _float_text(self.data)
        if self.kind is FieldType.TIME:
            return _time_text(self.data)
        if self.kind is FieldType.DATE:
            return self.data.isoformat()
        return _datetime_text(self.data)

    def to_float(self) -> float:
        """Return the value as a float for charting."""
        if self.kind in (FieldType.INTEGER, FieldType.FLOAT):
            return float(self.data)
        if self.kind is FieldType.STRING:
            try:
                return float(self.data.strip())
            except ValueError:
                raise RenderError(f"Value '{self.data}' is not a number")
        raise RenderError(f"Value of type {self.kind.value} is not a number")

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Value:
    """One cell: the decoded value (``None`` for SQL NULL) and its field."""

    inner: Optional[TypedValue]
    field: Field

    def __post_init__(self) -> None:
        if self.inner is not None and self.inner.kind is not self.field.kind:
            raise TypeError(
                f"Value of type {self.inner.kind.value} decoded for "
                f"{self.field.kind.value} field {self.field.field}"
            )

    def to_string(self) -> str:
        """Return the cell text; absent values render as an empty string."""
        if self.inner is None:
            return ""
        return self.inner.to_string()


Row = List[Value]


def _payload_matches(kind: FieldType, data: object) -> bool:
    if kind is FieldType.STRING:
        return isinstance(data, str)
    if kind is FieldType.INTEGER:
        return isinstance(data, int) and not isinstance(data, bool)
    if kind is FieldType.FLOAT:
        return isinstance(data, (int, float)) and not isinstance(data, bool)
    if kind is FieldType.TIME:
        return isinstance(data, time)
    if kind is FieldType.DATE:
        # datetime is a date subclass
        return isinstance(data, date) and not isinstance(data, datetime)
    return isinstance(data, datetime)


def _float_text(v: float) -> str:
    if not math.isfinite(v):
        return repr(v)
    # Shortest round-trip digits, never in exponent notation
    text = format(Decimal(repr(v)), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _time_text(v: time) -> str:
    if v.microsecond:
        return v.replace(tzinfo=None).isoformat()
    return v.replace(tzinfo=None).isoformat(timespec="seconds")


def _datetime_text(v: datetime) -> str:
    offset = v.utcoffset()
    total = int(offset.total_seconds()) if offset is not None else 0
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{v.strftime('%Y-%m-%d %H:%M:%S')} {sign}{hours:02d}:{minutes:02d}"
