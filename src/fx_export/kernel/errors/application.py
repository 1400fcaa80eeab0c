"""Application-layer errors – rejected export requests."""

from __future__ import annotations

from typing import Any

from fx_export.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnsupportedFormatError(ApplicationError):
    """The requested export format is not recognised."""

    default_code = "unsupported_format"

    def __init__(
        self,
        requested: Any,
        *,
        supported: tuple[str, ...] = (),
        **kwargs: Any,
    ) -> None:
        message = f"Unsupported export format: {requested!r}"
        if supported:
            message += f" (expected one of: {', '.join(supported)})"
        super().__init__(message, **kwargs)
        self.requested = requested
        self.supported = supported


__all__ = [
    "ApplicationError",
    "UnsupportedFormatError",
]
