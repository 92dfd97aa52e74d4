"""Output formats and the text primitives each one is assembled from."""

from __future__ import annotations

import html
from enum import Enum

_HTML_STYLE = """.lmr-table { border-collapse: collapse; }
.lmr-table th, .lmr-table td { border: 1px solid #d0d7de; padding: 4px 8px; text-align: left; }
.lmr-table th { background: #f6f8fa; }
.lmr-img { max-width: 100%; height: auto; }"""


class OutputFormat(str, Enum):
    """Target encoding of a report."""

    PLAIN = "plain"
    MARKDOWN = "markdown"
    HTML = "html"

    @classmethod
    def parse(cls, value: "OutputFormat | str") -> "OutputFormat":
        """Return the format named ``value`` (case-insensitive)."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())

    @property
    def is_html(self) -> bool:
        return self is OutputFormat.HTML

    def escape(self, text: str) -> str:
        """Escape free text for inclusion in this format."""
        if self is OutputFormat.HTML:
            return html.escape(text)
        return text

    def title1(self, title: str) -> str:
        if self is OutputFormat.HTML:
            return f"<h1>{html.escape(title)}</h1>\n"
        if self is OutputFormat.MARKDOWN:
            return f"\n# {title}\n\n"
        return f"\n{title}\n\n"

    def title2(self, title: str) -> str:
        if self is OutputFormat.HTML:
            return f"<h3>{html.escape(title)}</h3>\n"
        if self is OutputFormat.MARKDOWN:
            return f"## {title}\n\n"
        return f"{title}\n\n"

    def simple(self, content: str) -> str:
        return f"{content}\n"

    def break_line(self) -> str:
        if self is OutputFormat.HTML:
            return "<br>\n"
        return "\n"

    def body(self, content: str) -> str:
        """Wrap the assembled report; only HTML gets a document envelope."""
        if self is not OutputFormat.HTML:
            return content
        return (
            "<!DOCTYPE html>\n"
            "<html>\n"
            "<head>\n"
            '<meta charset="utf-8">\n'
            f"<style>\n{_HTML_STYLE}\n</style>\n"
            "</head>\n"
            "<body>\n"
            f"{content}"
            "</body>\n"
            "</html>\n"
        )
