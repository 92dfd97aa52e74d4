"""Sequential execution of the configured queries against one driver."""

import logging
from typing import List, Protocol, Sequence

from common.errors import FetchError
from common.models import Query
from dal.factory import get_driver
from dal.query_result import QueryResult

logger = logging.getLogger(__name__)


class SourceSettings(Protocol):
    """Connection settings of the data source."""

    kind: str
    conn: str


async def fetch(source: SourceSettings, queries: Sequence[Query]) -> List[QueryResult]:
    """Fetch every query in order, keeping each failure in its own slot.

    The driver connects once. A connection failure (or an unsupported source
    kind) is raised to the caller; a failing query never stops the ones after
    it. Queries run strictly one after another on the same connection.

    Raises:
        SourceConnectionError: If the driver cannot be created or connected.
    """
    driver = get_driver(source.kind)

    try:
        logger.info("Connecting on database")
        await driver.connect(source.conn)
        logger.debug("Database connected")

        results: List[QueryResult] = []
        for query in queries:
            logger.info(f"Fetching '{query.title}' query")
            try:
                rows = await driver.fetch(query)
            except FetchError as exc:
                logger.warning(f"Query '{query.title}' failed: {exc}")
                results.append(QueryResult.failure(query, exc))
            else:
                results.append(QueryResult.success(query, rows))
        return results
    finally:
        await driver.close()
