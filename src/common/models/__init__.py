"""Typed data models shared by the data and presentation layers."""

from common.models.query import Query
from common.models.value import Field, FieldType, Row, TypedValue, Value

__all__ = ["Field", "FieldType", "Query", "Row", "TypedValue", "Value"]
