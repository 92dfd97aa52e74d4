"""Common error taxonomy helpers."""

from common.errors.error_codes import ErrorKind, is_fatal
from common.errors.exceptions import (
    ColumnNotFoundError,
    ConfigError,
    DecodeError,
    DeliveryError,
    FetchError,
    LmrError,
    RenderError,
    SourceConnectionError,
    UnsupportedSourceError,
)

__all__ = [
    "ColumnNotFoundError",
    "ConfigError",
    "DecodeError",
    "DeliveryError",
    "ErrorKind",
    "FetchError",
    "LmrError",
    "RenderError",
    "SourceConnectionError",
    "UnsupportedSourceError",
    "is_fatal",
]
