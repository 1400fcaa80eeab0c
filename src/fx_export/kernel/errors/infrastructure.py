"""Infrastructure errors – format library and serialisation failures."""

from __future__ import annotations

from typing import Any

from fx_export.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class EncodeFailedError(InfrastructureError):
    """An encoder could not produce its artifact.

    ``message`` is safe to show to end users; the root cause is chained on
    ``cause`` / ``__cause__`` and logged by the caller.
    """

    default_code = "encode_failed"

    def __init__(
        self,
        export_format: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or "The export file could not be generated", **kwargs)
        self.export_format = export_format
        self.detail.setdefault("format", export_format)


__all__ = [
    "EncodeFailedError",
    "InfrastructureError",
    "SerializationError",
]
