"""Shared report fixtures."""

import pytest

from common.models import Field, FieldType, Query, TypedValue, Value

USER_NAME = Field(field="user_name", title="User name", kind=FieldType.STRING)
AGE = Field(field="age", title="Age", kind=FieldType.INTEGER)


def _make_row(name, age):
    return [
        Value(inner=None if name is None else TypedValue(FieldType.STRING, name), field=USER_NAME),
        Value(inner=None if age is None else TypedValue(FieldType.INTEGER, age), field=AGE),
    ]


@pytest.fixture
def make_row():
    """Build a (user name, age) row; ``None`` marks an absent value."""
    return _make_row


@pytest.fixture
def users_query():
    return Query(sql="SELECT user_name, age FROM users", title="Title test", fields=[USER_NAME, AGE])


@pytest.fixture
def users_rows():
    return [_make_row("john.abc", 30), _make_row(None, 28), _make_row("ane.abc", None)]
