"""Report pipeline: fetch every query, render the report, deliver it."""

import logging
from typing import Dict, Optional, TextIO

from common.interfaces import Component
from dal.executor import fetch
from delivery.mail import to_mail
from delivery.stdout import to_stdout
from lmr.config import LmrConfig, QueryConfig
from presentation.models import DataPresented
from presentation.orchestrator import present_as
from presentation.table import TableComponent

logger = logging.getLogger(__name__)


def resolve_component(query: QueryConfig) -> Component:
    """Return the configured chart, or a table when the query has none."""
    if query.chart is not None:
        return query.chart
    return TableComponent()


async def build_report(config: LmrConfig) -> DataPresented:
    """Fetch every configured query and render the report.

    Raises:
        SourceConnectionError: If the source cannot be reached.
    """
    components: Dict[str, Component] = {q.key: resolve_component(q) for q in config.queries}
    results = await fetch(config.source, config.build_queries())

    entries = [(result.query, components[result.query.key], result) for result in results]
    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.warning(f"{failed} of {len(results)} queries failed")

    return present_as(entries, config.title, config.send.format)


async def deliver(config: LmrConfig, data: DataPresented, stream: Optional[TextIO] = None) -> None:
    """Send ``data`` to every configured destination."""
    send = config.send
    if send.stdout:
        to_stdout(data, stream)
    if send.mail is not None:
        await to_mail(send.mail, config.title, data)
    if not send.stdout and send.mail is None:
        logger.warning("No delivery configured; the report was not sent anywhere")


async def run_report(config: LmrConfig, stream: Optional[TextIO] = None) -> DataPresented:
    """Build the report for ``config`` and deliver it."""
    logger.info(f"Generating report '{config.title}' with {len(config.queries)} queries")
    data = await build_report(config)
    await deliver(config, data, stream)
    logger.info("Report completed")
    return data
