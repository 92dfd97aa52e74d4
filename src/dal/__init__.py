"""Data access layer: source drivers, type coercion and query execution."""

from dal.executor import fetch
from dal.factory import SourceKind, get_driver, register_driver
from dal.query_result import QueryResult

__all__ = ["QueryResult", "SourceKind", "fetch", "get_driver", "register_driver"]
