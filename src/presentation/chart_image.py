"""Chart drawing with matplotlib.

Uses the object-oriented ``Figure`` API so no pyplot global state or GUI
backend is involved; images are encoded as PNG.
"""

from __future__ import annotations

import io
from typing import List, Sequence

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

CHART_MIME = "image/png"
FIGURE_SIZE = (8.0, 4.5)
BASE_DPI = 100


def figure_bytes(fig: Figure, fmt: str = "png", *, dpi: int = BASE_DPI) -> bytes:
    """Encode ``fig`` into image bytes."""
    FigureCanvasAgg(fig)
    buffer = io.BytesIO()
    fig.savefig(buffer, format=fmt, dpi=dpi, bbox_inches="tight")
    return buffer.getvalue()


def draw_bar(series: Sequence, keys: List[str], title: str = "") -> bytes:
    """Draw grouped bars, one group per key and one bar per series."""
    fig = Figure(figsize=FIGURE_SIZE)
    ax = fig.add_subplot()
    count = max(len(series), 1)
    width = 0.8 / count
    for idx, serie in enumerate(series):
        offset = (idx - (count - 1) / 2) * width
        positions = [i + offset for i in range(len(serie.data))]
        ax.bar(positions, serie.data, width, label=serie.name)
    _decorate_axes(ax, series, keys, title)
    return figure_bytes(fig)


def draw_line(series: Sequence, keys: List[str], title: str = "") -> bytes:
    """Draw one line per series over the keys axis."""
    fig = Figure(figsize=FIGURE_SIZE)
    ax = fig.add_subplot()
    for serie in series:
        ax.plot(list(range(len(serie.data))), serie.data, marker="o", label=serie.name)
    _decorate_axes(ax, series, keys, title)
    return figure_bytes(fig)


def draw_pie(series: Sequence, title: str = "") -> bytes:
    """Draw one slice per series, sized by the sum of its values."""
    sizes = [sum(serie.data) for serie in series]
    if not sizes or sum(sizes) <= 0:
        raise ValueError("pie values must add up to a positive number")
    fig = Figure(figsize=FIGURE_SIZE)
    ax = fig.add_subplot()
    ax.pie(sizes, labels=[serie.name for serie in series], autopct="%1.1f%%")
    ax.axis("equal")
    if title:
        ax.set_title(title)
    return figure_bytes(fig)


def _decorate_axes(ax, series: Sequence, keys: List[str], title: str) -> None:
    ax.set_xticks(list(range(len(keys))))
    # Long key lists get slanted labels
    rotate = len(keys) > 6
    ax.set_xticklabels(keys, rotation=30 if rotate else 0, ha="right" if rotate else "center")
    ax.grid(axis="y", alpha=0.3)
    if len(series) > 1:
        ax.legend()
    if title:
        ax.set_title(title)
