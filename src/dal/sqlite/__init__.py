"""SQLite-backed data source driver."""

from .driver import SqliteDriver

__all__ = ["SqliteDriver"]
