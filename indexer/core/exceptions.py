"""
Exception hierarchy for the search indexer service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class IndexerException(Exception):
    """Base exception for all indexer application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class SearchNotConfiguredError(IndexerException):
    """Raised when a search is requested but no search service is configured."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Search service is not configured", details)


class SearchServiceError(IndexerException):
    """Raised when a call to the managed search service fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize search service error.

        Args:
            message: Error message
            operation: Operation that failed (search, index, delete, create_index)
            status_code: HTTP status returned by the search service, if any
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if status_code is not None:
            details["status_code"] = status_code
        self.operation = operation
        self.status_code = status_code
        super().__init__(message, details)


class AuthenticationError(IndexerException):
    """Raised when a request cannot be authenticated."""

    def __init__(
        self,
        message: str,
        scheme: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if scheme:
            details["scheme"] = scheme
        self.scheme = scheme
        super().__init__(message, details)
