"""Tests for output format primitives."""

import pytest

from presentation.formats import OutputFormat


def test_parse():
    assert OutputFormat.parse("HTML") is OutputFormat.HTML
    assert OutputFormat.parse(" markdown ") is OutputFormat.MARKDOWN
    assert OutputFormat.parse(OutputFormat.PLAIN) is OutputFormat.PLAIN
    with pytest.raises(ValueError):
        OutputFormat.parse("pdf")


def test_plain_primitives():
    fmt = OutputFormat.PLAIN
    assert fmt.title1("Report") == "\nReport\n\n"
    assert fmt.title2("Section") == "Section\n\n"
    assert fmt.simple("text") == "text\n"
    assert fmt.break_line() == "\n"
    assert fmt.body("content") == "content"
    assert not fmt.is_html


def test_markdown_primitives():
    fmt = OutputFormat.MARKDOWN
    assert fmt.title1("Report") == "\n# Report\n\n"
    assert fmt.title2("Section") == "## Section\n\n"
    assert fmt.break_line() == "\n"
    assert fmt.body("content") == "content"


def test_html_primitives():
    fmt = OutputFormat.HTML
    assert fmt.title1("Report") == "<h1>Report</h1>\n"
    assert fmt.title2("A & B") == "<h3>A &amp; B</h3>\n"
    assert fmt.break_line() == "<br>\n"
    assert fmt.escape("<b>") == "&lt;b&gt;"
    assert fmt.is_html


def test_html_body_envelope():
    body = OutputFormat.HTML.body("<h1>Report</h1>\n")
    assert body.startswith("<!DOCTYPE html>")
    assert "<style>" in body and ".lmr-table" in body and ".lmr-img" in body
    assert "<body>\n<h1>Report</h1>\n</body>" in body


def test_escape_is_noop_outside_html():
    assert OutputFormat.PLAIN.escape("<b>") == "<b>"
    assert OutputFormat.MARKDOWN.escape("<b>") == "<b>"
