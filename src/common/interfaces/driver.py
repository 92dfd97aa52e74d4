from typing import List, Protocol, runtime_checkable

from common.models import Query, Row


@runtime_checkable
class Driver(Protocol):
    """Protocol for a data source backend.

    A driver owns at most one live connection, opened by ``connect`` and
    released by ``close``. Every fetched row is aligned with ``query.fields``.
    """

    name: str

    async def connect(self, conn: str) -> None:
        """Open the connection described by ``conn``.

        Raises:
            SourceConnectionError: If the backend cannot be reached.
        """
        ...

    async def fetch(self, query: Query) -> List[Row]:
        """Run ``query`` and decode each configured field of every row.

        Raises:
            SourceConnectionError: If called before ``connect``.
            FetchError: If the query fails or a column cannot be decoded.
        """
        ...

    async def close(self) -> None:
        """Release the connection; safe to call more than once."""
        ...
