"""
Payment adapters for external services.

All Stripe API calls should go through StripeAdapter to ensure
consistent error handling, credentials and observability.

Usage:
    from payments.adapters import CreatePaymentIntentParams, get_stripe_adapter

    result = get_stripe_adapter().create_payment_intent(
        CreatePaymentIntentParams(amount=5000, currency="usd")
    )
"""

from functools import lru_cache

from payments.adapters.stripe_adapter import (
    AccountLinkResult,
    BalanceResult,
    ConnectedAccountResult,
    CreateConnectedAccountParams,
    CreatePaymentIntentParams,
    CreatePayoutParams,
    CreateRefundParams,
    IdempotencyKeyGenerator,
    PaymentIntentResult,
    PayoutResult,
    RefundResult,
    StripeAdapter,
    configure_http_client,
)
from payments.config import StripeConfig


@lru_cache(maxsize=None)
def get_stripe_adapter() -> StripeAdapter:
    """
    Process-wide StripeAdapter built from settings.

    Also installs the SDK HTTP client with the configured timeout. Call
    get_stripe_adapter.cache_clear() after changing Stripe settings.
    """
    config = StripeConfig.from_settings()
    configure_http_client(config)
    return StripeAdapter(config)


__all__ = [
    "AccountLinkResult",
    "BalanceResult",
    "ConnectedAccountResult",
    "CreateConnectedAccountParams",
    "CreatePaymentIntentParams",
    "CreatePayoutParams",
    "CreateRefundParams",
    "IdempotencyKeyGenerator",
    "PaymentIntentResult",
    "PayoutResult",
    "RefundResult",
    "StripeAdapter",
    "configure_http_client",
    "get_stripe_adapter",
]
