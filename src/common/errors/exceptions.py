"""Exception hierarchy carrying structured context.

The display text of every error is produced by ``str(exc)``; the structured
attributes (backend, field, row index) stay available for logging.
"""

from __future__ import annotations

from typing import Optional

from common.errors.error_codes import ErrorKind


class LmrError(Exception):
    """Base class for all report generation errors."""

    kind: ErrorKind = ErrorKind.FETCH

    def __init__(self, message: str) -> None:
        """Initialize with the user-facing message."""
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SourceConnectionError(LmrError):
    """Raised when a driver cannot be selected or connected."""

    kind = ErrorKind.CONNECTION

    def __init__(self, message: str, *, backend: Optional[str] = None) -> None:
        """Initialize with an optional backend name."""
        super().__init__(message)
        self.backend = backend


class UnsupportedSourceError(SourceConnectionError):
    """Raised when no driver exists for the configured source kind."""

    def __init__(self, kind: object = None) -> None:
        """Initialize for the rejected kind."""
        super().__init__("Not supported kind")
        self.source_kind = kind


class FetchError(LmrError):
    """Raised when a single query cannot be prepared, executed or mapped."""

    kind = ErrorKind.FETCH


class ColumnNotFoundError(FetchError):
    """Raised when a configured field has no matching result column."""

    def __init__(self, field: str) -> None:
        """Initialize for the missing column."""
        super().__init__(f"Column {field} not found")
        self.field = field


class DecodeError(FetchError):
    """Raised when one cell cannot be decoded into its field type."""

    kind = ErrorKind.DECODE

    def __init__(self, field: str, row_index: int, reason: str) -> None:
        """Initialize with the failing field and zero-based row index."""
        super().__init__(f"Column {field} row {row_index} error: {reason}")
        self.field = field
        self.row_index = row_index
        self.reason = reason


class RenderError(LmrError):
    """Raised when a component cannot render a query result."""

    kind = ErrorKind.RENDER


class ConfigError(LmrError):
    """Raised when the configuration cannot be loaded or is inconsistent."""

    kind = ErrorKind.CONFIG


class DeliveryError(LmrError):
    """Raised when a rendered report cannot be delivered."""

    kind = ErrorKind.DELIVERY
