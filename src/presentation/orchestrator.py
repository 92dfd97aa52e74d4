"""Report assembly: one section per query, each rendered or replaced by a diagnostic."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from common.errors import LmrError
from common.interfaces import Component
from common.models import Query
from dal.query_result import QueryResult
from presentation.formats import OutputFormat
from presentation.models import DataPresented, ImagePresented

logger = logging.getLogger(__name__)

FOOTER = "Report generated by lmr"

ReportEntry = Tuple[Query, Component, QueryResult]


def present_as(data: Sequence[ReportEntry], title: str, format: OutputFormat) -> DataPresented:
    """Assemble the report for ``data`` in ``format``.

    Fetch failures, empty results and render failures are written inline in
    their own section so the rest of the report is always produced.

    Args:
        data: (query, component, fetch result) entries in report order.
        title: Report title used in the top-level heading.
        format: Target output format.

    Returns:
        The report content, whether it is HTML, and every inline image.
    """
    format = OutputFormat.parse(format)
    images: List[ImagePresented] = []
    parts = [format.title1(f"The {title} results are here!")]

    for query, component, result in data:
        parts.append(format.break_line())
        parts.append(format.title2(f"Query: {query.title}"))
        parts.append(_section(query, component, result, format, images))
        parts.append(format.break_line())
        parts.append(format.break_line())

    parts.append(format.simple(format.escape(FOOTER)))

    logger.debug(f"Report '{title}' assembled with {len(data)} sections and {len(images)} images")
    return DataPresented(
        is_html=format.is_html,
        content=format.body("".join(parts)),
        images=tuple(images),
    )


def _section(
    query: Query,
    component: Component,
    result: QueryResult,
    format: OutputFormat,
    images: List[ImagePresented],
) -> str:
    if result.error is not None:
        return format.simple(format.escape(f"Query failed: {result.error}"))

    if not result.rows:
        return format.simple("Empty result")

    try:
        rendered = component.render(query, result.rows, format)
    except LmrError as exc:
        logger.warning(f"Rendering '{query.title}' failed: {exc}")
        return format.simple(format.escape(f"Error on rendering: {exc}"))

    images.extend(rendered.images)
    return format.simple(rendered.content)
