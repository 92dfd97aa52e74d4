"""PostgreSQL-backed data source driver."""

from .driver import PostgresDriver

__all__ = ["PostgresDriver"]
