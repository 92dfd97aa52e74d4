"""Physical backend type names and the field types they can be decoded into."""

from __future__ import annotations

from typing import FrozenSet, Optional

from common.models import FieldType

# PostgreSQL type names as reported by asyncpg statement attributes.
POSTGRES_TYPE_FIELD_TYPES: dict[str, FrozenSet[FieldType]] = {
    "int2": frozenset({FieldType.INTEGER}),
    "int4": frozenset({FieldType.INTEGER}),
    "int8": frozenset({FieldType.INTEGER}),
    "float4": frozenset({FieldType.FLOAT}),
    "float8": frozenset({FieldType.FLOAT}),
    "numeric": frozenset({FieldType.FLOAT}),
    "text": frozenset({FieldType.STRING}),
    "varchar": frozenset({FieldType.STRING}),
    "bpchar": frozenset({FieldType.STRING}),
    "char": frozenset({FieldType.STRING}),
    "name": frozenset({FieldType.STRING}),
    "date": frozenset({FieldType.DATE}),
    "time": frozenset({FieldType.TIME}),
    "timestamp": frozenset({FieldType.DATETIME}),
    "timestamptz": frozenset({FieldType.DATETIME}),
}

# Storage classes of the values SQLite hands back.
SQLITE_STORAGE_FIELD_TYPES: dict[str, FrozenSet[FieldType]] = {
    "integer": frozenset({FieldType.INTEGER, FieldType.FLOAT}),
    "real": frozenset({FieldType.FLOAT}),
    "text": frozenset(
        {FieldType.STRING, FieldType.TIME, FieldType.DATE, FieldType.DATETIME}
    ),
    "blob": frozenset(),
}


def postgres_type_supports(type_name: Optional[str], kind: FieldType) -> bool:
    """Return True when a PostgreSQL column of ``type_name`` decodes into ``kind``."""
    if not type_name:
        return False
    return kind in POSTGRES_TYPE_FIELD_TYPES.get(type_name.strip().lower(), frozenset())


def sqlite_storage_class(value: object) -> str:
    """Return the SQLite storage class name of a fetched Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool) or isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "real"
    if isinstance(value, str):
        return "text"
    return "blob"


def sqlite_storage_supports(value: object, kind: FieldType) -> bool:
    """Return True when a fetched SQLite value may be decoded into ``kind``."""
    return kind in SQLITE_STORAGE_FIELD_TYPES.get(sqlite_storage_class(value), frozenset())
