"""Rendered report values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class ImagePresented:
    """An inline image referenced from the report by ``cid``."""

    cid: str
    mime: str
    data: bytes

    def __repr__(self) -> str:
        return f"ImagePresented(cid={self.cid!r}, mime={self.mime!r}, size={len(self.data)})"


@dataclass
class RenderedContent:
    """Output of one component render: a content fragment and its images."""

    content: str
    images: List[ImagePresented] = field(default_factory=list)


@dataclass(frozen=True)
class DataPresented:
    """A complete report ready for delivery."""

    is_html: bool
    content: str
    images: Tuple[ImagePresented, ...] = ()
