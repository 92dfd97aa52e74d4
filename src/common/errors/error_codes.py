"""Closed error-kind taxonomy for report generation flows."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Bounded error kinds surfaced by the data and presentation layers."""

    CONNECTION = "connection"
    FETCH = "fetch"
    DECODE = "decode"
    RENDER = "render"
    CONFIG = "config"
    DELIVERY = "delivery"


# Kinds that abort the whole run instead of a single report section.
FATAL_KINDS = frozenset({ErrorKind.CONNECTION, ErrorKind.CONFIG, ErrorKind.DELIVERY})


def is_fatal(kind: ErrorKind | str) -> bool:
    """Return True when an error of this kind must stop the run."""
    try:
        return ErrorKind(kind) in FATAL_KINDS
    except ValueError:
        return True
