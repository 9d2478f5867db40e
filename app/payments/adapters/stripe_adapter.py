"""
Stripe API adapter for payment operations.

This module provides the StripeAdapter class which encapsulates all
Stripe API interactions. All Stripe calls should go through this
adapter to ensure consistent error handling, timeouts, and observability.

Features:
- Per-call credentials from an immutable StripeConfig (no global api_key)
- One process-wide HTTP client carrying the configured timeout
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- Idempotency keys for account creation

Usage:
    from payments.adapters import CreatePaymentIntentParams, get_stripe_adapter

    adapter = get_stripe_adapter()

    # Authorize a payment without capturing it
    result = adapter.create_payment_intent(
        CreatePaymentIntentParams(
            amount=5000,
            currency="usd",
            metadata={"description": "Mentoring session"},
        )
    )

    # Release an uncaptured authorization
    adapter.cancel_payment_intent(result.id, reason="requested_by_customer")
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import stripe
from django.conf import settings

from payments.exceptions import (
    StripeAPIUnavailableError,
    StripeCardDeclinedError,
    StripeInvalidAccountError,
    StripeInvalidRequestError,
    StripeNotConfiguredError,
    StripeRateLimitError,
    WebhookVerificationError,
)

if TYPE_CHECKING:
    from payments.config import StripeConfig


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreatePaymentIntentParams:
    """
    Parameters for creating a Stripe PaymentIntent.

    Attributes:
        amount: Payment amount in smallest currency unit (e.g., cents)
        currency: ISO 4217 currency code
        description: Shown on the Stripe dashboard and receipts
        metadata: Key-value pairs to attach to the PaymentIntent
        capture_method: 'automatic' or 'manual' (default: 'manual')
    """

    amount: int
    currency: str
    description: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    capture_method: str = "manual"

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.amount <= 0:
            raise ValueError("amount must be positive")
        if not self.currency:
            raise ValueError("currency is required")


@dataclass
class PaymentIntentResult:
    """
    Result from Stripe PaymentIntent operations.

    Attributes:
        id: PaymentIntent ID (pi_xxx)
        status: Current status (requires_payment_method, requires_capture, ...)
        amount: Amount in smallest currency unit
        currency: Currency code
        client_secret: Secret for client-side confirmation
        metadata: Attached metadata
        raw_response: Full Stripe response dict (for debugging)
    """

    id: str
    status: str
    amount: int
    currency: str
    client_secret: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class CreateRefundParams:
    """
    Parameters for refunding a PaymentIntent.

    Attributes:
        payment_intent_id: PaymentIntent to refund (pi_xxx)
        reason: duplicate, fraudulent or requested_by_customer
        amount: Partial amount; None refunds the full captured amount
    """

    payment_intent_id: str
    reason: str = "requested_by_customer"
    amount: int | None = None

    def __post_init__(self) -> None:
        if not self.payment_intent_id:
            raise ValueError("payment_intent_id is required")
        if self.amount is not None and self.amount <= 0:
            raise ValueError("amount must be positive")


@dataclass
class RefundResult:
    """
    Result from Stripe Refund operations.

    Attributes:
        id: Refund ID (re_xxx)
        amount: Refunded amount in smallest currency unit
        currency: Currency code
        status: Refund status (succeeded, pending, failed)
        payment_intent_id: Original PaymentIntent ID
        created: Creation time (unix seconds)
        raw_response: Full Stripe response dict
    """

    id: str
    amount: int
    currency: str
    status: str
    payment_intent_id: str
    created: int | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class CreateConnectedAccountParams:
    """
    Parameters for creating an Express connected account for a mentor.

    Attributes:
        mentor_id: Mentor document id, stored in account metadata
        email: Mentor email prefilled on the onboarding form
        country: ISO 3166-1 alpha-2 country code
    """

    mentor_id: str
    email: str
    country: str = "US"

    def __post_init__(self) -> None:
        if not self.mentor_id or not self.email:
            raise ValueError("mentor_id and email are required")


@dataclass
class ConnectedAccountResult:
    """
    Result from Stripe Account operations.

    Attributes:
        id: Account ID (acct_xxx)
        details_submitted: Whether onboarding details were submitted
        charges_enabled: Whether the account can accept charges
        payouts_enabled: Whether the account can receive payouts
        raw_response: Full Stripe response dict
    """

    id: str
    details_submitted: bool = False
    charges_enabled: bool = False
    payouts_enabled: bool = False
    raw_response: dict[str, Any] = field(default_factory=dict)

    @property
    def onboarding_status(self) -> str:
        return "complete" if self.details_submitted else "pending"


@dataclass
class AccountLinkResult:
    """
    Result from Stripe AccountLink creation.

    Attributes:
        url: Single-use onboarding URL
        expires_at: Expiry time (unix seconds)
    """

    url: str
    expires_at: int | None = None


@dataclass
class BalanceResult:
    """
    Balance of a connected account.

    Each list holds Stripe's per-currency entries:
    [{"amount": 1200, "currency": "usd", "source_types": {...}}, ...]
    """

    available: list[dict[str, Any]] = field(default_factory=list)
    pending: list[dict[str, Any]] = field(default_factory=list)
    instant_available: list[dict[str, Any]] = field(default_factory=list)

    def available_amount(self, currency: str) -> int:
        """Sum of available funds in one currency."""
        return sum(
            entry.get("amount", 0)
            for entry in self.available
            if entry.get("currency", "").lower() == currency.lower()
        )


@dataclass
class CreatePayoutParams:
    """
    Parameters for paying out a connected account's balance.

    Attributes:
        account_id: Connected account (acct_xxx)
        amount: Amount in smallest currency unit
        currency: Currency code
        description: Internal description
        statement_descriptor: Text on the mentor's bank statement
    """

    account_id: str
    amount: int
    currency: str
    description: str | None = None
    statement_descriptor: str | None = None

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError("amount must be positive")
        if not self.account_id:
            raise ValueError("account_id is required")


@dataclass
class PayoutResult:
    """
    Result from Stripe Payout creation.

    Attributes:
        id: Payout ID (po_xxx)
        amount: Amount in smallest currency unit
        currency: Currency code
        status: pending, in_transit, paid, failed or canceled
        arrival_date: Expected arrival (unix seconds)
        raw_response: Full Stripe response dict
    """

    id: str
    amount: int
    currency: str
    status: str
    arrival_date: int | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Idempotency Key Generator
# =============================================================================


class IdempotencyKeyGenerator:
    """
    Generate idempotency keys for Stripe API calls.

    Format: "{operation}:{entity_id}:{hash}"

    The key is deterministic for an operation and entity, so a repeated
    request within Stripe's 24h idempotency window returns the original
    object instead of creating a second one.

    Example:
        key = IdempotencyKeyGenerator.generate("create_account", "mentor_42")
        # Result: "create_account:mentor_42:a1b2c3d4"
    """

    @staticmethod
    def generate(operation: str, entity_id: str) -> str:
        """
        Generate an idempotency key.

        Args:
            operation: The Stripe operation (create_account, ...)
            entity_id: The domain entity ID (mentor id, ...)

        Returns:
            Formatted idempotency key string
        """
        hash_input = f"{operation}:{entity_id}:{settings.SECRET_KEY}"
        short_hash = hashlib.sha256(hash_input.encode()).hexdigest()[:8]

        return f"{operation}:{entity_id}:{short_hash}"


def configure_http_client(config: StripeConfig) -> None:
    """
    Install the SDK HTTP client with the configured timeout.

    The stripe module keeps a single default HTTP client for every resource
    call, so the timeout is process-wide. Credentials are still passed per
    call. get_stripe_adapter() calls this once when building the shared
    adapter.
    """
    if config.timeout_seconds:
        stripe.default_http_client = stripe.RequestsClient(
            timeout=config.timeout_seconds
        )


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Adapter for Stripe API operations.

    Holds only the immutable StripeConfig, so one instance is safe to share
    between request threads.

    Features:
    - Credentials passed per call from StripeConfig
    - Automatic error translation to domain exceptions
    - Structured logging with timing metrics

    Usage:
        adapter = StripeAdapter(StripeConfig.from_settings())
        result = adapter.retrieve_payment_intent("pi_xxx")
    """

    def __init__(self, config: StripeConfig):
        self.config = config

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    def _request_options(self) -> dict[str, Any]:
        """
        Credentials for a single SDK call.

        Raises:
            StripeNotConfiguredError: No secret key is configured
        """
        if not self.config.is_configured:
            self.get_logger().error("Stripe secret key is not configured")
            raise StripeNotConfiguredError("Payment service configuration error")

        options: dict[str, Any] = {"api_key": self.config.secret_key}
        if self.config.api_version:
            options["stripe_version"] = self.config.api_version
        return options

    # =========================================================================
    # Payment Intents
    # =========================================================================

    def create_payment_intent(
        self,
        params: CreatePaymentIntentParams,
    ) -> PaymentIntentResult:
        """
        Create a Stripe PaymentIntent.

        Args:
            params: Parameters for creating the PaymentIntent

        Returns:
            PaymentIntentResult including the client_secret

        Raises:
            StripeNotConfiguredError: No secret key configured
            StripeInvalidRequestError: Invalid parameters
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        log_context = {
            "operation": "create_payment_intent",
            "amount": params.amount,
            "currency": params.currency,
            "capture_method": params.capture_method,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        create_params: dict[str, Any] = {}
        if params.description:
            create_params["description"] = params.description
        if params.metadata:
            create_params["metadata"] = params.metadata

        try:
            intent = stripe.PaymentIntent.create(
                amount=params.amount,
                currency=params.currency,
                capture_method=params.capture_method,
                **create_params,
                **options,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={
                **log_context,
                "payment_intent_id": intent.id,
                "status": intent.status,
                "duration_ms": duration_ms,
            },
        )
        return self._payment_intent_result(intent)

    def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntentResult:
        """
        Retrieve a PaymentIntent.

        Raises:
            StripeInvalidRequestError: Unknown PaymentIntent
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        log_context = {
            "operation": "retrieve_payment_intent",
            "payment_intent_id": payment_intent_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, **options)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={**log_context, "status": intent.status, "duration_ms": duration_ms},
        )
        return self._payment_intent_result(intent)

    def cancel_payment_intent(
        self,
        payment_intent_id: str,
        reason: str | None = None,
    ) -> PaymentIntentResult:
        """
        Cancel a PaymentIntent, releasing any authorization hold.

        Args:
            payment_intent_id: Stripe PaymentIntent ID (pi_xxx)
            reason: Cancellation reason (duplicate, fraudulent,
                requested_by_customer, abandoned)

        Raises:
            StripeInvalidRequestError: PaymentIntent can't be canceled
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        log_context = {
            "operation": "cancel_payment_intent",
            "payment_intent_id": payment_intent_id,
            "reason": reason,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        cancel_params: dict[str, Any] = {}
        if reason:
            cancel_params["cancellation_reason"] = reason

        try:
            intent = stripe.PaymentIntent.cancel(
                payment_intent_id,
                **cancel_params,
                **options,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={**log_context, "status": intent.status, "duration_ms": duration_ms},
        )
        return self._payment_intent_result(intent)

    # =========================================================================
    # Refunds
    # =========================================================================

    def create_refund(self, params: CreateRefundParams) -> RefundResult:
        """
        Refund a captured PaymentIntent.

        Args:
            params: Refund parameters

        Returns:
            RefundResult with refund details

        Raises:
            StripeInvalidRequestError: Not refundable or amount too large
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        log_context = {
            "operation": "create_refund",
            "payment_intent_id": params.payment_intent_id,
            "amount": params.amount,
            "reason": params.reason,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        refund_params: dict[str, Any] = {
            "payment_intent": params.payment_intent_id,
            "reason": params.reason,
        }
        if params.amount is not None:
            refund_params["amount"] = params.amount

        try:
            refund = stripe.Refund.create(**refund_params, **options)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={
                **log_context,
                "refund_id": refund.id,
                "status": refund.status,
                "duration_ms": duration_ms,
            },
        )

        data = refund.to_dict()
        return RefundResult(
            id=data["id"],
            amount=data.get("amount", 0),
            currency=data.get("currency", ""),
            status=data.get("status", ""),
            payment_intent_id=data.get("payment_intent") or params.payment_intent_id,
            created=data.get("created"),
            raw_response=data,
        )

    # =========================================================================
    # Connect Accounts
    # =========================================================================

    def create_connected_account(
        self,
        params: CreateConnectedAccountParams,
    ) -> ConnectedAccountResult:
        """
        Create an Express connected account for a mentor.

        The idempotency key is derived from the mentor id, so a retried
        request returns the same account instead of creating another.

        Raises:
            StripeInvalidRequestError: Invalid email or country
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        idempotency_key = IdempotencyKeyGenerator.generate(
            "create_account", params.mentor_id
        )
        log_context = {
            "operation": "create_connected_account",
            "mentor_id": params.mentor_id,
            "country": params.country,
            "idempotency_key": idempotency_key,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            account = stripe.Account.create(
                type="express",
                country=params.country,
                email=params.email,
                business_type="individual",
                capabilities={
                    "card_payments": {"requested": True},
                    "transfers": {"requested": True},
                },
                metadata={"mentorId": params.mentor_id},
                idempotency_key=idempotency_key,
                **options,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={**log_context, "account_id": account.id, "duration_ms": duration_ms},
        )

        data = account.to_dict()
        return ConnectedAccountResult(
            id=data["id"],
            details_submitted=bool(data.get("details_submitted")),
            charges_enabled=bool(data.get("charges_enabled")),
            payouts_enabled=bool(data.get("payouts_enabled")),
            raw_response=data,
        )

    def create_account_link(
        self,
        account_id: str,
        refresh_url: str,
        return_url: str,
    ) -> AccountLinkResult:
        """
        Create a hosted onboarding link for a connected account.

        Raises:
            StripeInvalidAccountError: Unknown account
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        log_context = {
            "operation": "create_account_link",
            "account_id": account_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            link = stripe.AccountLink.create(
                account=account_id,
                refresh_url=refresh_url,
                return_url=return_url,
                type="account_onboarding",
                **options,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={**log_context, "duration_ms": duration_ms},
        )

        data = link.to_dict()
        return AccountLinkResult(url=data["url"], expires_at=data.get("expires_at"))

    # =========================================================================
    # Balances and Payouts
    # =========================================================================

    def retrieve_balance(self, account_id: str) -> BalanceResult:
        """
        Retrieve the balance of a connected account.

        Raises:
            StripeInvalidAccountError: Account not connected to the platform
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        log_context = {
            "operation": "retrieve_balance",
            "account_id": account_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            balance = stripe.Balance.retrieve(stripe_account=account_id, **options)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={**log_context, "duration_ms": duration_ms},
        )

        data = balance.to_dict()
        return BalanceResult(
            available=data.get("available") or [],
            pending=data.get("pending") or [],
            instant_available=data.get("instant_available") or [],
        )

    def create_payout(self, params: CreatePayoutParams) -> PayoutResult:
        """
        Pay out funds from a connected account to its bank account.

        Raises:
            StripeInvalidRequestError: Amount exceeds balance, no bank account
            StripeInvalidAccountError: Account not connected to the platform
            StripeAPIUnavailableError: Stripe service unavailable
        """
        options = self._request_options()
        logger = self.get_logger()

        log_context = {
            "operation": "create_payout",
            "account_id": params.account_id,
            "amount": params.amount,
            "currency": params.currency,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        payout_params: dict[str, Any] = {}
        if params.description:
            payout_params["description"] = params.description
        if params.statement_descriptor:
            payout_params["statement_descriptor"] = params.statement_descriptor

        try:
            payout = stripe.Payout.create(
                amount=params.amount,
                currency=params.currency,
                stripe_account=params.account_id,
                **payout_params,
                **options,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={**log_context, "payout_id": payout.id, "duration_ms": duration_ms},
        )

        data = payout.to_dict()
        return PayoutResult(
            id=data["id"],
            amount=data.get("amount", params.amount),
            currency=data.get("currency", params.currency),
            status=data.get("status", ""),
            arrival_date=data.get("arrival_date"),
            raw_response=data,
        )

    # =========================================================================
    # Webhook Verification
    # =========================================================================

    def construct_webhook_event(
        self,
        payload: bytes,
        signature: str,
    ) -> dict[str, Any]:
        """
        Verify and parse a Stripe webhook event.

        Args:
            payload: Raw webhook payload bytes
            signature: Stripe-Signature header value

        Returns:
            Parsed event data dict

        Raises:
            WebhookVerificationError: Bad signature, stale timestamp or
                unparseable payload
        """
        try:
            event = stripe.Webhook.construct_event(
                payload,
                signature,
                self.config.webhook_secret,
            )
        except stripe.SignatureVerificationError as e:
            self.get_logger().warning(
                "Webhook signature verification failed",
                extra={"operation": "construct_webhook_event"},
            )
            raise WebhookVerificationError(
                str(e.user_message or e),
                details={"reason": "signature_verification_failed"},
            ) from e
        except ValueError as e:
            self.get_logger().warning(
                "Webhook payload is not valid JSON",
                extra={"operation": "construct_webhook_event"},
            )
            raise WebhookVerificationError(
                str(e),
                details={"reason": "invalid_payload"},
            ) from e
        return event.to_dict()

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _payment_intent_result(intent: Any) -> PaymentIntentResult:
        data = intent.to_dict()
        return PaymentIntentResult(
            id=data["id"],
            status=data.get("status", ""),
            amount=data.get("amount", 0),
            currency=data.get("currency", ""),
            client_secret=data.get("client_secret"),
            metadata=dict(data.get("metadata") or {}),
            raw_response=data,
        )

    # =========================================================================
    # Error Handling
    # =========================================================================

    @classmethod
    def _handle_stripe_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to domain exceptions.

        Maps Stripe SDK errors to the payments.exceptions hierarchy and
        logs each with its category. The SDK message stays in the logs and
        in the exception; API responses only carry a generic message.

        Args:
            error: The Stripe exception
            log_context: Logging context dict
            duration_ms: Operation duration for logging

        Raises:
            StripeCardDeclinedError: Card was declined
            StripeInvalidAccountError: Invalid Connect account
            StripeInvalidRequestError: Invalid request parameters
            StripeRateLimitError: Rate limited
            StripeAPIUnavailableError: API unavailable or unexpected error
        """
        logger = cls.get_logger()

        # Add timing to context
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, stripe.CardError):
            decline_code = getattr(error, "decline_code", None)
            logger.warning(
                "Card error from Stripe",
                extra={**log_context, "decline_code": decline_code},
            )
            raise StripeCardDeclinedError(
                str(error.user_message or error),
                stripe_code=error.code,
                decline_code=decline_code,
            ) from error

        elif isinstance(error, stripe.InvalidRequestError):
            # Invalid parameters or resource not found
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code, "error": str(error)},
            )

            if error.code == "account_invalid" or "account" in (error.param or ""):
                raise StripeInvalidAccountError(
                    str(error.user_message or error),
                    stripe_code=error.code,
                ) from error

            raise StripeInvalidRequestError(
                str(error.user_message or error),
                stripe_code=error.code,
            ) from error

        elif isinstance(error, stripe.PermissionError):
            # Connected account revoked platform access
            logger.error(
                "Stripe permission denied",
                extra={**log_context, "error": str(error)},
            )
            raise StripeInvalidAccountError(
                str(error.user_message or error),
                stripe_code="permission_error",
            ) from error

        elif isinstance(error, stripe.RateLimitError):
            logger.warning(
                "Rate limited by Stripe",
                extra=log_context,
            )
            raise StripeRateLimitError(
                "Stripe rate limit exceeded",
                stripe_code="rate_limit",
            ) from error

        elif isinstance(error, stripe.APIConnectionError):
            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Could not connect to Stripe",
                stripe_code="api_connection_error",
            ) from error

        elif isinstance(error, stripe.AuthenticationError):
            # Invalid API key - permanent, operational issue
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise StripeAPIUnavailableError(
                "Stripe authentication failed",
                stripe_code="authentication_error",
            ) from error

        elif isinstance(error, stripe.APIError):
            logger.error(
                "Stripe API error",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Stripe service error",
                stripe_code="api_error",
            ) from error

        else:
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Unexpected Stripe error: {error}",
                stripe_code="unknown_error",
            ) from error
