"""Decoding of raw backend values into typed values.

Every driver funnels its cells through :func:`decode_value`, so the same
field type always yields the same ``TypedValue`` payload whichever backend
produced the row. Backend-specific type checks happen in the drivers before
a value reaches this module.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Optional

from common.models import FieldType, TypedValue


def decode_value(kind: FieldType, raw: Any) -> Optional[TypedValue]:
    """Decode ``raw`` into a value of ``kind``; SQL NULL decodes to ``None``.

    Raises:
        ValueError: With a short reason when ``raw`` cannot be decoded.
    """
    if raw is None:
        return None
    decoder = _DECODERS[kind]
    return TypedValue(kind, decoder(raw))


def _decode_string(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    raise ValueError(f"expected text, got {_type_label(raw)}")


def _decode_integer(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise ValueError(f"expected integer, got {_type_label(raw)}")


def _decode_float(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError("expected number, got boolean")
    if isinstance(raw, (int, float, Decimal)):
        return float(raw)
    raise ValueError(f"expected number, got {_type_label(raw)}")


def _decode_time(raw: Any) -> time:
    if isinstance(raw, time):
        return raw
    if isinstance(raw, str):
        return parse_time(raw)
    raise ValueError(f"expected time, got {_type_label(raw)}")


def _decode_date(raw: Any) -> date:
    if isinstance(raw, datetime):
        raise ValueError("expected date, got timestamp")
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        return parse_date(raw)
    raise ValueError(f"expected date, got {_type_label(raw)}")


def _decode_datetime(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw if raw.tzinfo is not None else raw.replace(tzinfo=timezone.utc)
    if isinstance(raw, str):
        return parse_datetime(raw)
    raise ValueError(f"expected timestamp, got {_type_label(raw)}")


def parse_time(text: str) -> time:
    """Parse ``HH:MM:SS`` (optionally with fractional seconds)."""
    try:
        return time.fromisoformat(text.strip())
    except ValueError:
        raise ValueError(f"invalid time '{text}', expected HH:MM:SS")


def parse_date(text: str) -> date:
    """Parse ``YYYY-MM-DD``."""
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        raise ValueError(f"invalid date '{text}', expected YYYY-MM-DD")


def parse_datetime(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; a missing offset is read as UTC."""
    cleaned = text.strip()
    if cleaned[-1:] in ("Z", "z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        raise ValueError(f"invalid timestamp '{text}', expected RFC 3339")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _type_label(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return "blob"
    return type(raw).__name__


_DECODERS = {
    FieldType.STRING: _decode_string,
    FieldType.INTEGER: _decode_integer,
    FieldType.FLOAT: _decode_float,
    FieldType.TIME: _decode_time,
    FieldType.DATE: _decode_date,
    FieldType.DATETIME: _decode_datetime,
}
