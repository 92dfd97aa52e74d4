"""Configured query definition."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField

from common.models.value import Field


class Query(BaseModel):
    """A SQL statement, its display title and the fields read from its result.

    ``key`` identifies the query within one configuration and is what
    render components are looked up by.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sql: str
    title: str
    fields: List[Field] = PydanticField(default_factory=list)
    key: str = ""

    def field_by_name(self, name: str) -> Optional[Field]:
        """Return the field whose source column is ``name`` (exact match)."""
        return next((f for f in self.fields if f.field == name), None)
