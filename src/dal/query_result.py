from dataclasses import dataclass, field
from typing import List, Optional

from common.errors import LmrError
from common.models import Query, Row


@dataclass
class QueryResult:
    """Outcome of one configured query: its rows or the error that stopped it."""

    query: Query
    rows: List[Row] = field(default_factory=list)
    error: Optional[LmrError] = None

    @property
    def ok(self) -> bool:
        """Return True when the query was fetched successfully."""
        return self.error is None

    @classmethod
    def success(cls, query: Query, rows: List[Row]) -> "QueryResult":
        return cls(query=query, rows=rows)

    @classmethod
    def failure(cls, query: Query, error: LmrError) -> "QueryResult":
        return cls(query=query, error=error)
