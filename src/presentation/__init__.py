"""Report rendering: output formats, components and the orchestrator."""

from presentation.charts import ChartComponent, ChartSeriesBy, ChartType
from presentation.formats import OutputFormat
from presentation.models import DataPresented, ImagePresented, RenderedContent
from presentation.orchestrator import present_as
from presentation.table import TableComponent

__all__ = [
    "ChartComponent",
    "ChartSeriesBy",
    "ChartType",
    "DataPresented",
    "ImagePresented",
    "OutputFormat",
    "RenderedContent",
    "TableComponent",
    "present_as",
]
