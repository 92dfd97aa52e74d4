import logging
import sqlite3
from typing import List, Optional

import aiosqlite

from common.errors import DecodeError, FetchError, SourceConnectionError
from common.models import Query, Row, Value
from dal.coercion import decode_value
from dal.tracing import trace_query_operation
from dal.util.column_metadata import columns_from_cursor_description, resolve_fields
from dal.util.logical_types import sqlite_storage_class, sqlite_storage_supports

logger = logging.getLogger(__name__)


class SqliteDriver:
    """SQLite driver over aiosqlite.

    SQLite has no temporal storage class, so time, date and timestamp fields
    are parsed from ISO-8601 text.
    """

    name = "sqlite"

    def __init__(self) -> None:
        self._conn: Optional[aiosqlite.Connection] = None

    async def connect(self, conn: str) -> None:
        """Open the database file, ``:memory:`` or ``file:`` URI in ``conn``."""
        db_path, uri = _resolve_sqlite_path(conn)
        logger.debug(f"Opening SQLite database {db_path}")
        try:
            self._conn = await trace_query_operation(
                "lmr.source.connect",
                backend=self.name,
                sql=None,
                operation=aiosqlite.connect(db_path, uri=uri, isolation_level=None),
            )
        except (sqlite3.Error, OSError) as exc:
            raise SourceConnectionError(
                f"Sqlite connection failed: {exc}", backend=self.name
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

    async def _fetch(self, conn: aiosqlite.Connection, query: Query) -> List[Row]:
        try:
            cursor = await conn.execute(query.sql)
        except sqlite3.Error as exc:
            raise FetchError(f"Prepare statement failed: {exc}") from exc

        try:
            columns = columns_from_cursor_description(cursor.description)
            mapping = resolve_fields(query, columns)
            try:
                raw_rows = await cursor.fetchall()
            except sqlite3.Error as exc:
                raise FetchError(f"Query failed: {exc}") from exc
        finally:
            await cursor.close()

        rows: List[Row] = []
        for row_index, raw_row in enumerate(raw_rows):
            row: Row = []
            for field, column in mapping:
                raw = raw_row[column.index]
                if raw is not None and not sqlite_storage_supports(raw, field.kind):
                    raise DecodeError(
                        field.field,
                        row_index,
                        f"Invalid {field.kind.value} value of type {sqlite_storage_class(raw)}",
                    )
                try:
                    inner = decode_value(field.kind, raw)
                except ValueError as exc:
                    raise DecodeError(field.field, row_index, str(exc)) from exc
                row.append(Value(inner=inner, field=field))
            rows.append(row)

        logger.debug(f"Fetched {len(rows)} rows for '{query.title}'")
        return rows


def _resolve_sqlite_path(conn: str) -> tuple[str, bool]:
    cleaned = (conn or "").strip()
    if not cleaned:
        return ":memory:", False
    return cleaned, cleaned.startswith("file:")
