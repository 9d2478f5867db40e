"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the API
- Machine-readable error codes for client handling
- A default HTTP status per error category

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures (400)
    ├── NotFoundError - Resource not found (404)
    ├── ConflictError - State conflicts with an existing record (409)
    └── ExternalServiceError - Collaborator failures (500)

Usage:
    from core.exceptions import NotFoundError, ValidationError

    # Raise with message only
    raise ValidationError("Valid amount is required")

    # Raise with error code and details
    raise NotFoundError(
        "Mentor not found",
        error_code="MENTOR_NOT_FOUND",
        details={"mentor_id": mentor_id},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.http_status)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (parsing, method not allowed, etc.),
    and core.exception_handler renders both in the same shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, ids, etc.)
        http_status: Status code used when the error reaches the API layer

    Example:
        try:
            record = repository.get(mentor_id)
        except BaseApplicationError as e:
            logger.warning(f"Lookup failed: {e.error_code}")
            return Response(e.to_dict(), status=e.http_status)
    """

    default_error_code: str = "APPLICATION_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and (when present) details keys

        Example:
            {
                "error": "Mentor not found",
                "error_code": "MENTOR_NOT_FOUND",
                "details": {"mentor_id": "m1"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Missing required fields
    - Values outside the accepted range (non-positive amounts)
    - Requests that are invalid given the current entity state

    Note:
        For request body validation, use DRF serializers.
        Use this for service-layer validation logic.
    """

    default_error_code: str = "VALIDATION_ERROR"
    http_status: int = 400


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        record = repository.get(mentor_id)
        if record is None:
            raise NotFoundError(
                "Mentor not found",
                error_code="MENTOR_NOT_FOUND",
                details={"mentor_id": mentor_id},
            )
    """

    default_error_code: str = "NOT_FOUND"
    http_status: int = 404


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current resource state.

    Use for:
    - Writes that would overwrite an existing, different value
    - Concurrent modification detected between read and write

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
    http_status: int = 409


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external collaborator call fails.

    Use for:
    - Payment processor failures
    - Document store failures
    - Network timeouts and unexpected responses

    Note:
        Log the original error for debugging but don't expose
        internal details to clients. The API layer answers with a
        generic message and HTTP 500.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    http_status: int = 500
