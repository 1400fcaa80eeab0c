"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── InvariantViolationError
    │   ├── ValidationError
    │   │   └── ConfigInvalidError
    │   ├── ChartDataError
    │   └── NotFoundError
    ├── ApplicationError         (application.py)
    │   └── UnsupportedFormatError
    └── InfrastructureError      (infrastructure.py)
        ├── SerializationError
        └── EncodeFailedError
"""

from fx_export.kernel.errors.application import ApplicationError, UnsupportedFormatError
from fx_export.kernel.errors.base import BaseError
from fx_export.kernel.errors.domain import (
    ChartDataError,
    ConfigInvalidError,
    DomainError,
    InvariantViolationError,
    NotFoundError,
    ValidationError,
)
from fx_export.kernel.errors.infrastructure import (
    EncodeFailedError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ChartDataError",
    "ConfigInvalidError",
    "DomainError",
    "EncodeFailedError",
    "InfrastructureError",
    "InvariantViolationError",
    "NotFoundError",
    "SerializationError",
    "UnsupportedFormatError",
    "ValidationError",
]
