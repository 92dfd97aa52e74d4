"""Table component: rows as a fixed-column grid."""

from __future__ import annotations

import html
import unicodedata
from typing import List

from common.models import Query, Row
from presentation.formats import OutputFormat
from presentation.models import RenderedContent

TABLE_CLASS = "lmr-table"
_INDENT = "    "


class TableComponent:
    """Render rows as a grid, one column per configured field.

    Works for every output format and never produces images.
    """

    def render(self, query: Query, rows: List[Row], format: OutputFormat) -> RenderedContent:
        header = [f.title for f in query.fields]
        body = [[value.to_string() for value in row] for row in rows]

        if format is OutputFormat.HTML:
            content = html_table(header, body)
        elif format is OutputFormat.MARKDOWN:
            content = markdown_table(header, body)
        else:
            content = ascii_table(header, body)

        return RenderedContent(content=content)


def ascii_table(header: List[str], body: List[List[str]]) -> str:
    """Return a box-drawn grid with a rule between every row."""
    records = [_flatten(header)] + [_flatten(r) for r in body]
    widths = _column_widths(records)
    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    lines = [rule]
    for record in records:
        lines.append(_pipe_row(record, widths))
        lines.append(rule)
    return "\n".join(lines)


def markdown_table(header: List[str], body: List[List[str]]) -> str:
    """Return a pipe table with a header separator."""
    records = [[_markdown_cell(c) for c in header]]
    records += [[_markdown_cell(c) for c in r] for r in body]
    widths = _column_widths(records)
    separator = "|" + "|".join("-" * (w + 2) for w in widths) + "|"

    lines = [_pipe_row(records[0], widths), separator]
    lines += [_pipe_row(record, widths) for record in records[1:]]
    return "\n".join(lines)


def html_table(header: List[str], body: List[List[str]]) -> str:
    """Return a ``<table>`` element tagged with the report table class."""
    lines = [f'<table class="{TABLE_CLASS}">', f"{_INDENT}<thead>", f"{_INDENT * 2}<tr>"]
    lines += [f"{_INDENT * 3}<th>{html.escape(cell)}</th>" for cell in header]
    lines += [f"{_INDENT * 2}</tr>", f"{_INDENT}</thead>", f"{_INDENT}<tbody>"]
    for record in body:
        lines.append(f"{_INDENT * 2}<tr>")
        lines += [f"{_INDENT * 3}<td>{html.escape(cell)}</td>" for cell in record]
        lines.append(f"{_INDENT * 2}</tr>")
    lines += [f"{_INDENT}</tbody>", "</table>"]
    return "\n".join(lines)


def _flatten(record: List[str]) -> List[str]:
    return [" ".join(cell.splitlines()) for cell in record]


def _markdown_cell(cell: str) -> str:
    return " ".join(cell.splitlines()).replace("|", "\\|")


def display_width(text: str) -> int:
    """Return the terminal column count of ``text``.

    Wide and fullwidth East Asian characters take two columns; combining
    marks take none.
    """
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _column_widths(records: List[List[str]]) -> List[int]:
    return [max(display_width(record[i]) for record in records) for i in range(len(records[0]))]


def _pad(cell: str, width: int) -> str:
    return cell + " " * (width - display_width(cell))


def _pipe_row(record: List[str], widths: List[int]) -> str:
    cells = " | ".join(_pad(cell, width) for cell, width in zip(record, widths))
    return f"| {cells} |"
