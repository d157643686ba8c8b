"""
Domain Errors

Failure taxonomy of the KPI engine. A zero-denominator ratio is not an error:
it resolves to ``None`` and is only logged.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    code = "DomainError"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidWindowError(DomainError):
    """Raised when the requested date window cannot be resolved."""

    code = "InvalidWindow"


class DataSourceUnavailableError(DomainError):
    """Raised when a record stream cannot be reached or read."""

    code = "DataSourceUnavailable"

    def __init__(self, stream: str, reason: str, details: Optional[Dict[str, Any]] = None):
        self.stream = stream
        message = f"Record stream '{stream}' is unavailable: {reason}"
        super().__init__(message, {"stream": stream, **(details or {})})


class DataSourceTimeoutError(DomainError):
    """Raised when a record stream query exceeds its deadline."""

    code = "DataSourceTimeout"

    def __init__(
        self, stream: str, timeout_seconds: float, details: Optional[Dict[str, Any]] = None
    ):
        self.stream = stream
        self.timeout_seconds = timeout_seconds
        message = f"Query on record stream '{stream}' timed out after {timeout_seconds}s"
        super().__init__(
            message,
            {"stream": stream, "timeout_seconds": timeout_seconds, **(details or {})},
        )
