"""
Payment-specific exceptions for payment operations.

This module provides a hierarchy of exceptions for payment operations,
covering payment domain errors and Stripe-specific errors.

Exception Hierarchy:
    PaymentError (base for payment domain)
    └── PaymentProcessingError - Payment processing failures
        ├── StripeError - Base for all Stripe API errors
        │   ├── StripeCardDeclinedError - Card declined
        │   ├── StripeInvalidAccountError - Invalid Connect account
        │   ├── StripeInvalidRequestError - Invalid request params
        │   ├── StripeRateLimitError - Rate limited
        │   └── StripeAPIUnavailableError - API unreachable or 5xx
        ├── StripeNotConfiguredError - No secret key configured
        └── WebhookVerificationError - Bad webhook signature or payload

Usage:
    from payments.exceptions import PaymentProcessingError, StripeError

    try:
        adapter.create_refund(params)
    except PaymentProcessingError:
        logger.exception("Refund failed")
        return Response({"error": "Failed to process refund"}, status=500)

Note:
    Nothing is retried. is_retryable is informational and ends up in the
    logs so operators can tell transient failures from permanent ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any


# =============================================================================
# Payment Domain Exceptions
# =============================================================================


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment operations.

    All payment-specific exceptions inherit from this class,
    which itself inherits from BaseApplicationError for
    consistent API error responses.
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentProcessingError(PaymentError):
    """
    Raised when payment processing fails.

    Use for:
    - Stripe API errors
    - Missing processor configuration
    - Webhook verification failures
    """

    default_error_code: str = "PAYMENT_PROCESSING_ERROR"
    http_status: int = 500


# =============================================================================
# Stripe-Specific Exceptions
# =============================================================================


class StripeError(PaymentProcessingError):
    """
    Base exception for all Stripe-related errors.

    Provides common attributes for Stripe error handling:
    - stripe_code: Stripe's internal error code
    - decline_code: Card decline code (if applicable)
    - is_retryable: Whether the failure is transient

    Example:
        try:
            adapter.create_payment_intent(...)
        except StripeError as e:
            logger.error(
                "Payment intent failed",
                extra={"stripe_code": e.stripe_code, "retryable": e.is_retryable},
            )
    """

    default_error_code: str = "STRIPE_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        stripe_code: str | None = None,
        decline_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if stripe_code:
            details["stripe_code"] = stripe_code
        if decline_code:
            details["decline_code"] = decline_code
        super().__init__(message, error_code=error_code, details=details)
        self.stripe_code = stripe_code
        self.decline_code = decline_code


# -----------------------------------------------------------------------------
# Permanent Errors
# -----------------------------------------------------------------------------


class StripeCardDeclinedError(StripeError):
    """
    Card was declined by the issuing bank.

    The decline_code attribute contains the specific reason
    (generic_decline, insufficient_funds, expired_card, ...).
    """

    default_error_code: str = "CARD_DECLINED"
    is_retryable: bool = False


class StripeInvalidAccountError(StripeError):
    """
    Invalid Stripe Connect account.

    Raised when the connected account passed in stripe_account is:
    - Not found
    - Not connected to the platform
    - Disabled or restricted

    This requires manual intervention to resolve the account status.
    """

    default_error_code: str = "INVALID_STRIPE_ACCOUNT"
    is_retryable: bool = False


class StripeInvalidRequestError(StripeError):
    """
    Invalid request parameters sent to Stripe.

    Possible causes:
    - Unknown payment intent ID
    - Invalid amount or currency
    - Operation not allowed (e.g., refund > captured amount)

    Check the stripe_code and details for specific information
    about what was invalid.
    """

    default_error_code: str = "INVALID_STRIPE_REQUEST"
    is_retryable: bool = False


# -----------------------------------------------------------------------------
# Transient Errors
# -----------------------------------------------------------------------------


class StripeRateLimitError(StripeError):
    """
    Rate limited by Stripe API.

    Stripe allows 100 requests/second in live mode, 25/second in test mode.
    """

    default_error_code: str = "STRIPE_RATE_LIMITED"
    is_retryable: bool = True


class StripeAPIUnavailableError(StripeError):
    """
    Stripe API is temporarily unavailable.

    This covers:
    - Network connectivity issues
    - Stripe server errors (5xx)
    - Authentication failures caused by a rotated or wrong key
    """

    default_error_code: str = "STRIPE_UNAVAILABLE"
    is_retryable: bool = True


# =============================================================================
# Configuration and Webhook Exceptions
# =============================================================================


class StripeNotConfiguredError(PaymentProcessingError):
    """
    Raised when a Stripe call is attempted without a secret key.

    Surfaces as HTTP 500 "Payment service configuration error". There is
    no fallback key.
    """

    default_error_code: str = "STRIPE_NOT_CONFIGURED"


class WebhookVerificationError(PaymentProcessingError):
    """
    Raised when a webhook request can't be turned into an event.

    Use for:
    - Signature mismatch or expired timestamp
    - Body that isn't a JSON object
    - Unsigned request while unverified delivery is disabled
    """

    default_error_code: str = "WEBHOOK_VERIFICATION_FAILED"
    http_status: int = 400


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Payment domain
    "PaymentError",
    "PaymentProcessingError",
    # Stripe-specific
    "StripeError",
    "StripeCardDeclinedError",
    "StripeInvalidAccountError",
    "StripeInvalidRequestError",
    "StripeRateLimitError",
    "StripeAPIUnavailableError",
    # Configuration and webhooks
    "StripeNotConfiguredError",
    "WebhookVerificationError",
]
