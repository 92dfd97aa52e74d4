"""Chart component: shapes rows into series/keys and draws an inline image."""

from __future__ import annotations

import html
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from common.errors import RenderError
from common.models import Query, Row, Value
from presentation import chart_image
from presentation.formats import OutputFormat
from presentation.models import ImagePresented, RenderedContent

logger = logging.getLogger(__name__)

IMAGE_CLASS = "lmr-img"


class ChartType(str, Enum):
    """Supported chart kinds."""

    BAR = "bar"
    LINE = "line"
    PIE = "pie"


_CHART_TYPE_ALIASES = {"pizza": "pie"}


@dataclass
class Series:
    """A named value vector aligned with the chart keys."""

    name: str
    data: List[float] = field(default_factory=list)


class ChartSeriesBy(BaseModel):
    """Grouped series: one series per distinct ``key`` value, valued by ``values``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    values: str


class ChartComponent(BaseModel):
    """Render rows as a bar, line or pie chart (HTML output only).

    Series come either from ``series`` (one series per listed field, one
    point per row) or from ``series_by`` (one series per distinct value of
    ``series_by.key``, zero-filled along the keys axis). Keys are the
    distinct values of ``keys_by`` in first-occurrence order; pie charts do
    not need them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ChartType
    keys_by: Optional[str] = None
    series_by: Optional[ChartSeriesBy] = None
    series: Optional[List[str]] = None

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        """Accept chart kinds case-insensitively, including legacy aliases."""
        if isinstance(v, str):
            cleaned = v.strip().lower()
            return _CHART_TYPE_ALIASES.get(cleaned, cleaned)
        return v

    def prepare_keys(self, query: Query, rows: List[Row]) -> List[str]:
        """Return the distinct ``keys_by`` values in first-occurrence order."""
        if self.keys_by is None:
            if self.kind is not ChartType.PIE:
                raise RenderError("Keys must be defined")
            return []

        keys: List[str] = []
        for row in rows:
            key = get_key_by(self.keys_by, row)
            if key not in keys:
                keys.append(key)
        return keys

    def prepare_series(self, query: Query, keys: List[str], rows: List[Row]) -> List[Series]:
        """Build the series vectors for ``rows``."""
        if self.series is None and self.series_by is None:
            raise RenderError("Series must be defined")
        if self.series_by is not None and self.keys_by is None:
            raise RenderError("Keys must be defined")

        series: List[Series] = []

        for name in self.series or []:
            column = query.field_by_name(name)
            if column is None:
                raise RenderError(f"Field {name} not found")
            series.append(Series(column.title, [get_value_by(column.field, row) for row in rows]))

        if self.series_by is not None:
            series.extend(self._grouped_series(keys, rows))

        return series

    def _grouped_series(self, keys: List[str], rows: List[Row]) -> List[Series]:
        by = self.series_by
        names: List[str] = []
        for row in rows:
            name = get_key_by(by.key, row)
            if name not in names:
                names.append(name)

        positions: Dict[str, int] = {}
        for idx, key in enumerate(keys):
            positions.setdefault(key, idx)

        grouped: List[Series] = []
        for name in names:
            # Keys without a row for this series stay at zero
            data = [0.0] * len(keys)
            for row in rows:
                if get_key_by(by.key, row) != name:
                    continue
                value = get_value_by(by.values, row)
                position = positions.get(get_key_by(self.keys_by, row))
                if position is not None:
                    data[position] = value
            grouped.append(Series(name, data))
        return grouped

    def render(self, query: Query, rows: List[Row], format: OutputFormat) -> RenderedContent:
        if format is not OutputFormat.HTML:
            raise RenderError("Output format without chart support")

        keys = self.prepare_keys(query, rows)
        series = self.prepare_series(query, keys, rows)
        logger.debug(f"Drawing {self.kind.value} chart with {len(series)} series")

        try:
            if self.kind is ChartType.BAR:
                data = chart_image.draw_bar(series, keys, title=query.title)
            elif self.kind is ChartType.LINE:
                data = chart_image.draw_line(series, keys, title=query.title)
            else:
                data = chart_image.draw_pie(series, title=query.title)
        except (ValueError, TypeError, RuntimeError) as exc:
            raise RenderError(f"Error generating chart: {exc}") from exc

        cid = str(uuid.uuid4())
        content = (
            f'<img class="{IMAGE_CLASS}" title="{html.escape(query.title)}" src="cid:{cid}">'
        )
        return RenderedContent(
            content=content,
            images=[ImagePresented(cid=cid, mime=chart_image.CHART_MIME, data=data)],
        )


def _find_value(by: str, row: Row) -> Value:
    value = next((v for v in row if v.field.field == by), None)
    if value is None:
        raise RenderError(f"Field {by} not found")
    return value


def get_key_by(by: str, row: Row) -> str:
    """Return the text of column ``by`` in ``row``; absent values give ``""``."""
    return _find_value(by, row).to_string()


def get_value_by(by: str, row: Row) -> float:
    """Return column ``by`` in ``row`` as a float; absent values give ``0.0``."""
    value = _find_value(by, row)
    if value.inner is None:
        return 0.0
    return value.inner.to_float()
