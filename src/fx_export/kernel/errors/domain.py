"""Domain errors – export configuration and report data violations."""

from __future__ import annotations

from typing import Any

from fx_export.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """An internal invariant was violated (e.g. drawing after finalize)."""

    default_code = "invariant_violation"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class ConfigInvalidError(ValidationError):
    """An export configuration cannot be encoded.

    Raised before any encode work starts; no partial artifact is produced.
    """

    default_code = "config_invalid"


class ChartDataError(DomainError):
    """A chart series is malformed (non-numeric, negative or non-finite)."""

    default_code = "chart_data_invalid"

    def __init__(
        self,
        message: str,
        *,
        series: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.series = series


class NotFoundError(DomainError):
    """The requested resource does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


__all__ = [
    "ChartDataError",
    "ConfigInvalidError",
    "DomainError",
    "InvariantViolationError",
    "NotFoundError",
    "ValidationError",
]
