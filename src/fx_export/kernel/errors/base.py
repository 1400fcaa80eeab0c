"""Root error class for the fx-export error hierarchy.

Errors travel two ways: ``message`` is what an end user may see, while
:meth:`BaseError.log_context` carries the machine-readable context that
goes onto structured log lines.
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description, safe to surface to users.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: JSON-friendly context (format, setting name, record id ...).
        cause: Library exception that triggered this error; also chained
            as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (code, message, detail and cause)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def log_context(self) -> dict[str, Any]:
        """Flat key/value pairs for ``logger.error(event, **err.log_context())``."""
        context: dict[str, Any] = {"error_code": self.code, **self.detail}
        if self.cause is not None:
            context["cause"] = repr(self.cause)
        return context


__all__ = ["BaseError"]
