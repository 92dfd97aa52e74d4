"""Tests for the SQLite driver against a real database file."""

import sqlite3
from datetime import date, time

import pytest

from common.errors import ColumnNotFoundError, DecodeError, FetchError, SourceConnectionError
from common.models import Field, FieldType, Query
from dal.sqlite import SqliteDriver


@pytest.fixture
def db_path(tmp_path):
    """Create a small users table."""
    path = tmp_path / "report.db"
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE users (
            name TEXT, age INTEGER, score REAL,
            born TEXT, wakes TEXT, joined TEXT
        );
        INSERT INTO users VALUES
            ('john.abc', 30, 7.5, '1994-05-12', '06:30:00', '2015-05-15 00:00:00'),
            (NULL, 28, NULL, NULL, NULL, NULL),
            ('ane.abc', NULL, 9, '1990-01-01', '07:00:00', '2020-01-01T12:00:00-03:00');
        """
    )
    conn.commit()
    conn.close()
    return str(path)


def _users_query(sql="SELECT name, age, score, born, wakes, joined FROM users ORDER BY rowid"):
    return Query(
        sql=sql,
        title="Users",
        fields=[
            Field(field="name", title="User name", kind=FieldType.STRING),
            Field(field="age", title="Age", kind=FieldType.INTEGER),
            Field(field="score", title="Score", kind=FieldType.FLOAT),
            Field(field="born", title="Born", kind=FieldType.DATE),
            Field(field="wakes", title="Wakes", kind=FieldType.TIME),
            Field(field="joined", title="Joined", kind=FieldType.DATETIME),
        ],
    )


class TestSqliteDriver:
    """Fetch and decode behavior."""

    @pytest.mark.asyncio
    async def test_fetch_decodes_every_type(self, db_path):
        """Values are decoded per field type and NULL becomes an absent value."""
        driver = SqliteDriver()
        await driver.connect(db_path)
        try:
            rows = await driver.fetch(_users_query())
        finally:
            await driver.close()

        assert len(rows) == 3
        first = rows[0]
        assert [v.to_string() for v in first] == [
            "john.abc",
            "30",
            "7.5",
            "1994-05-12",
            "06:30:00",
            "2015-05-15 00:00:00 +00:00",
        ]
        assert first[3].inner.data == date(1994, 5, 12)
        assert first[4].inner.data == time(6, 30)

        assert all(v.inner is None for v in rows[1] if v.field.field != "age")
        assert rows[1][1].to_string() == "28"

        assert rows[2][1].inner is None
        assert rows[2][2].to_string() == "9"
        assert rows[2][5].to_string() == "2020-01-01 12:00:00 -03:00"

    @pytest.mark.asyncio
    async def test_values_follow_field_order(self, db_path):
        """Rows are built in field order whatever the column order."""
        query = Query(
            sql="SELECT name, age FROM users ORDER BY rowid",
            title="Users",
            fields=[
                Field(field="age", title="Age", kind=FieldType.INTEGER),
                Field(field="name", title="User name", kind=FieldType.STRING),
            ],
        )
        driver = SqliteDriver()
        await driver.connect(db_path)
        rows = await driver.fetch(query)
        await driver.close()

        assert [v.field.field for v in rows[0]] == ["age", "name"]

    @pytest.mark.asyncio
    async def test_column_not_found(self, db_path):
        """A field without a result column fails the query."""
        query = Query(
            sql="SELECT name FROM users",
            title="Users",
            fields=[Field(field="email", title="Email", kind=FieldType.STRING)],
        )
        driver = SqliteDriver()
        await driver.connect(db_path)
        with pytest.raises(ColumnNotFoundError, match="Column email not found"):
            await driver.fetch(query)
        await driver.close()

    @pytest.mark.asyncio
    async def test_decode_error_reports_row_index(self, db_path):
        """Storage class mismatches name the field and the zero-based row."""
        query = Query(
            sql="SELECT name FROM users ORDER BY rowid",
            title="Users",
            fields=[Field(field="name", title="Name", kind=FieldType.INTEGER)],
        )
        driver = SqliteDriver()
        await driver.connect(db_path)
        with pytest.raises(DecodeError) as exc_info:
            await driver.fetch(query)
        await driver.close()

        assert exc_info.value.field == "name"
        assert exc_info.value.row_index == 0
        assert str(exc_info.value) == "Column name row 0 error: Invalid integer value of type text"

    @pytest.mark.asyncio
    async def test_invalid_temporal_text(self):
        """Unparseable temporal text is a decode error."""
        driver = SqliteDriver()
        await driver.connect(":memory:")
        query = Query(
            sql="SELECT '2025-05-12' AS d UNION ALL SELECT 'soon'",
            title="Dates",
            fields=[Field(field="d", title="D", kind=FieldType.DATE)],
        )
        with pytest.raises(DecodeError, match="Column d row 1 error: invalid date 'soon'"):
            await driver.fetch(query)
        await driver.close()

    @pytest.mark.asyncio
    async def test_prepare_failure(self, db_path):
        """Invalid SQL fails with a prepare error."""
        driver = SqliteDriver()
        await driver.connect(db_path)
        with pytest.raises(FetchError, match="^Prepare statement failed: "):
            await driver.fetch(_users_query("SELEC nonsense"))
        await driver.close()

    @pytest.mark.asyncio
    async def test_empty_result(self, db_path):
        """A query without rows returns an empty list."""
        driver = SqliteDriver()
        await driver.connect(db_path)
        rows = await driver.fetch(_users_query("SELECT * FROM users WHERE 1 = 0"))
        await driver.close()
        assert rows == []

    @pytest.mark.asyncio
    async def test_fetch_before_connect(self):
        """Fetching without a connection is a connection error."""
        with pytest.raises(SourceConnectionError, match="Connection not established"):
            await SqliteDriver().fetch(_users_query())

    @pytest.mark.asyncio
    async def test_connect_failure(self, tmp_path):
        """Unopenable paths fail with a connection error."""
        driver = SqliteDriver()
        with pytest.raises(SourceConnectionError, match="^Sqlite connection failed: ") as exc_info:
            await driver.connect(str(tmp_path / "missing" / "dir" / "report.db"))
        assert exc_info.value.backend == "sqlite"

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        """Closing twice (or before connecting) is harmless."""
        driver = SqliteDriver()
        await driver.close()
        await driver.connect(":memory:")
        await driver.close()
        await driver.close()
