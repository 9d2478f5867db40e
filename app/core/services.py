"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views and adapters.
    Views handle HTTP concerns, adapters handle external SDKs, services
    decide what to call and in which order.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, business rules,
      missing records)
    - Exceptions: Use for unexpected failures (processor or document store
      errors), which propagate to the view

Usage:
    from core.services import BaseService, ServiceResult

    class BalanceService(BaseService):
        def get_balance(self, mentor_id: str) -> ServiceResult[BalanceResult]:
            mentor = self.mentors.get(mentor_id)
            if mentor is None:
                return ServiceResult.failure(
                    "Mentor not found",
                    error_code="MENTOR_NOT_FOUND",
                )
            return ServiceResult.success(self.stripe.retrieve_balance(...))

    # In view
    result = service.get_balance(mentor_id)
    if result.success:
        return Response(result.data.to_response())
    return Response(result.to_response(), status=404)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        details: Extra keys merged into the error response body

    Usage:
        # Success case
        return ServiceResult.success(refund)

        # Failure case
        return ServiceResult.failure(
            "Payment cannot be refunded: status is processing",
            error_code="NON_REFUNDABLE_STATE",
        )

        # Check result
        result = service.refund(payment_intent_id)
        if result.success:
            refund = result.data
        else:
            print(f"Error: {result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            details: Extra keys to expose in the error response

        Returns:
            ServiceResult with success=False and error details

        Example:
            return ServiceResult.failure(
                "Insufficient balance",
                error_code="INSUFFICIENT_BALANCE",
                details={"available": 1200},
            )
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            details=details,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert a failed result to an API error body.

        The error code stays server-side; views map it to a status code.

        Returns:
            Dict with the error message and any extra details.
        """
        response: dict[str, Any] = {"error": self.error}
        if self.details:
            response.update(self.details)
        return response

    def __bool__(self) -> bool:
        """
        Allow using result in boolean context.

        Example:
            result = service.create_account(mentor_id, email)
            if result:  # Same as: if result.success
                ...
        """
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Services receive their collaborators (the Stripe adapter, the mentor
    repository) through the constructor and hold no per-request state, so a
    single instance may serve concurrent requests.

    Design Notes:
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
        - Collaborator calls run sequentially; nothing is retried
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")
