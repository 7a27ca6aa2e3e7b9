"""Error taxonomy for the resource filter pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories of transport errors."""

    AuthenticationError = "authentication_error"
    """Request was rejected as unauthenticated (401/403)."""

    NotFoundError = "not_found_error"
    """Resource does not exist (404)."""

    ValidationError = "validation_error"
    """Service rejected the request (400/409/422)."""

    RateLimitError = "rate_limit_error"
    """Rate limit exceeded (429)."""

    ServiceError = "service_error"
    """Remote service failed (5xx)."""

    TimeoutError = "timeout_error"
    """Request timed out."""

    NetworkError = "network_error"
    """Network connectivity issue."""

    UnknownError = "unknown_error"
    """Unknown or unclassified error."""


class SystemError(Exception):
    """Standardized error raised by the terminal transport.

    Filters let it propagate unchanged to the caller of the chain.

    Example:
        ```python
        raise SystemError(
            category=ErrorCategory.RateLimitError,
            message="Rate limit exceeded",
            status_code=429,
            retryable=True,
        )
        ```
    """

    def __init__(
        self,
        category: ErrorCategory | str,
        message: str,
        status_code: int | None = None,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SystemError.

        Args:
            category: Error category (ErrorCategory enum or string).
            message: Human-readable error message.
            status_code: HTTP status code if the service answered.
            retryable: Whether the error is retryable.
            details: Additional error details.
        """
        self.category = ErrorCategory(category) if isinstance(category, str) else category
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(category={self.category.value}, "
            f"message={self.message!r}, retryable={self.retryable})"
        )

    def __str__(self) -> str:
        return self.message


class TransportError(SystemError):
    """Raised by a ResourceTransport when a resource call fails."""


class EncryptionParameterError(ValueError):
    """Raised when an envelope parameter is present but malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize EncryptionParameterError.

        Args:
            message: Human-readable error message.
            field: Name of the offending query parameter.
        """
        self.message = message
        self.field = field
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.field:
            return f"Invalid encryption parameter '{self.field}': {self.message}"
        return self.message


class SaltGenerationError(Exception):
    """Raised when no salt can be produced (entropy unavailable).

    This is fatal for the call: a request that needs an envelope cannot be
    sent without a salt.
    """
