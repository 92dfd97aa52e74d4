"""Helpers for building column metadata from backend cursors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from common.errors import ColumnNotFoundError


@dataclass(frozen=True)
class ColumnMeta:
    """Name, position and backend type of one result column."""

    name: str
    index: int
    db_type: Optional[str] = None


def columns_from_asyncpg_attributes(attrs: List[Any]) -> List[ColumnMeta]:
    """Build column metadata from asyncpg statement attributes."""
    columns: List[ColumnMeta] = []
    for index, attr in enumerate(attrs or []):
        name = getattr(attr, "name", None) or str(attr)
        db_type = None
        attr_type = getattr(attr, "type", None)
        if attr_type is not None:
            db_type = getattr(attr_type, "name", None)
        columns.append(ColumnMeta(name=name, index=index, db_type=db_type))
    return columns


def columns_from_cursor_description(description: Optional[list]) -> List[ColumnMeta]:
    """Build column metadata from DB-API cursor description tuples."""
    columns: List[ColumnMeta] = []
    for index, entry in enumerate(description or []):
        name = (
            entry[0] if isinstance(entry, (list, tuple)) and entry else getattr(entry, "name", None)
        )
        db_type = None
        if isinstance(entry, (list, tuple)) and len(entry) > 1 and isinstance(entry[1], str):
            db_type = entry[1]
        columns.append(ColumnMeta(name=name, index=index, db_type=db_type))
    return columns


def find_column(columns: List[ColumnMeta], name: str) -> Optional[ColumnMeta]:
    """Return the first column named exactly ``name``."""
    return next((c for c in columns if c.name == name), None)


def resolve_fields(query, columns: List[ColumnMeta]) -> List[Tuple[Any, ColumnMeta]]:
    """Pair every field of ``query`` with its result column, in field order.

    Raises:
        ColumnNotFoundError: For the first field without a matching column.
    """
    mapping = []
    for field in query.fields:
        column = find_column(columns, field.field)
        if column is None:
            raise ColumnNotFoundError(field.field)
        mapping.append((field, column))
    return mapping
