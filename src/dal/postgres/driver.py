import asyncio
import logging
from typing import List, Optional

import asyncpg

from common.errors import DecodeError, FetchError, SourceConnectionError
from common.models import Query, Row, Value
from dal.coercion import decode_value
from dal.tracing import trace_query_operation
from dal.util.column_metadata import columns_from_asyncpg_attributes, resolve_fields
from dal.util.logical_types import postgres_type_supports

logger = logging.getLogger(__name__)

_CONNECT_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    ValueError,
)
_QUERY_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError)
# Result codecs raise plain ValueError/OverflowError for values Python cannot hold
_DECODE_ERRORS = (ValueError, OverflowError)


class PostgresDriver:
    """PostgreSQL driver over a single asyncpg connection.

    Columns are checked against the physical type reported for the prepared
    statement: integer fields accept int2/int4/int8, float fields accept
    float4/float8/numeric (numeric is narrowed to a double) and timestamps
    without a zone are read as UTC.
    """

    name = "postgres"

    def __init__(self) -> None:
        self._conn: Optional[asyncpg.Connection] = None

    async def connect(self, conn: str) -> None:
        """Connect using a libpq DSN or ``postgresql://`` URL."""
        try:
            self._conn = await trace_query_operation(
                "lmr.source.connect",
                backend=self.name,
                sql=None,
                operation=asyncpg.connect(dsn=conn),
            )
        except _CONNECT_ERRORS as exc:
            raise SourceConnectionError(
                f"Postgres connection failed: {exc}", backend=self.name
            ) from exc

    async def fetch(self, query: Query) -> List[Row]:
        """Run ``query`` and decode its configured fields."""
        if self._conn is None:
            raise SourceConnectionError("Connection not established", backend=self.name)

        return await trace_query_operation(
            "lmr.source.fetch",
            backend=self.name,
            sql=query.sql,
            operation=self._fetch(self._conn, query),
        )

    async def close(self) -> None:
        """Close the connection if one is open."""
        if self._conn is not None:
            conn, self._conn = self._conn, None
            await conn.close()

    async def _fetch(self, conn: asyncpg.Connection, query: Query) -> List[Row]:
        try:
            statement = await conn.prepare(query.sql)
        except _QUERY_ERRORS as exc:
            raise FetchError(f"Prepare statement failed: {exc}") from exc

        columns = columns_from_asyncpg_attributes(statement.get_attributes())
        mapping = resolve_fields(query, columns)

        try:
            records = await statement.fetch()
        except _QUERY_ERRORS + _DECODE_ERRORS as exc:
            raise FetchError(f"Query failed: {exc}") from exc

        rows: List[Row] = []
        for row_index, record in enumerate(records):
            row: Row = []
            for field, column in mapping:
                if not postgres_type_supports(column.db_type, field.kind):
                    raise DecodeError(
                        field.field,
                        row_index,
                        f"Invalid {field.kind.value} type {column.db_type}",
                    )
                try:
                    inner = decode_value(field.kind, record[column.index])
                except ValueError as exc:
                    raise DecodeError(field.field, row_index, str(exc)) from exc
                row.append(Value(inner=inner, field=field))
            rows.append(row)

        logger.debug(f"Fetched {len(rows)} rows for '{query.title}'")
        return rows
