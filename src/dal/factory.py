"""Driver factory with a registry of source kinds.

Source kind selection is a pure mapping from the configured kind to a new
driver instance; aliases are normalized by :mod:`dal.util.env`.

Canonical Source Kinds:
    - "sqlite": SqliteDriver (aiosqlite)
    - "postgres": PostgresDriver (asyncpg)

Example:
    >>> from dal.factory import get_driver
    >>> driver = get_driver("sqlite")
    >>> await driver.connect("/tmp/report.db")
"""

import logging
from enum import Enum
from typing import Union

from common.errors import UnsupportedSourceError
from common.interfaces import Driver
from dal.util.env import normalize_source_kind

logger = logging.getLogger(__name__)


class SourceKind(str, Enum):
    """Backends with a built-in driver."""

    SQLITE = "sqlite"
    POSTGRES = "postgres"


SOURCE_DRIVERS: "dict[str, type[Driver]]" = {}


def register_driver(kind: str, driver_cls: "type[Driver]") -> None:
    """Register (or replace) the driver class used for ``kind``."""
    SOURCE_DRIVERS[normalize_source_kind(kind)] = driver_cls


def _register_builtin_drivers() -> None:
    # Import implementations lazily so a missing optional backend stays local
    if SourceKind.SQLITE.value not in SOURCE_DRIVERS:
        from dal.sqlite import SqliteDriver

        SOURCE_DRIVERS[SourceKind.SQLITE.value] = SqliteDriver
    if SourceKind.POSTGRES.value not in SOURCE_DRIVERS:
        from dal.postgres import PostgresDriver

        SOURCE_DRIVERS[SourceKind.POSTGRES.value] = PostgresDriver


def get_driver(kind: Union[SourceKind, str]) -> Driver:
    """Return a new, unconnected driver for ``kind``.

    Raises:
        UnsupportedSourceError: If no driver is registered for the kind.
    """
    raw = kind.value if isinstance(kind, SourceKind) else kind
    normalized = normalize_source_kind(raw or "")
    logger.debug(f"Preparing the driver for {normalized}")

    _register_builtin_drivers()
    driver_cls = SOURCE_DRIVERS.get(normalized)
    if driver_cls is None:
        raise UnsupportedSourceError(kind)
    return driver_cls()
