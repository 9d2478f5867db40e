"""
Pytest fixtures for Stripe adapter tests.

Sections:
    - Adapter Fixtures
    - Error Response Fixtures
"""

import pytest
import stripe

from payments.adapters import StripeAdapter
from payments.config import StripeConfig


# =============================================================================
# Adapter Fixtures
# =============================================================================


@pytest.fixture
def stripe_config():
    """Config with test-mode credentials."""
    return StripeConfig(
        secret_key="sk_test_adapter",
        webhook_secret="whsec_adapter",
        api_version="2024-06-20",
    )


@pytest.fixture
def adapter(stripe_config):
    """Adapter under test."""
    return StripeAdapter(stripe_config)


@pytest.fixture
def unconfigured_adapter():
    """Adapter without a secret key."""
    return StripeAdapter(StripeConfig())


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def card_error():
    """Create a Stripe CardError."""
    return stripe.CardError(
        message="Your card was declined.",
        param=None,
        code="card_declined",
    )


@pytest.fixture
def invalid_request_error():
    """Create a Stripe InvalidRequestError."""

    def _create(
        message: str = "No such payment_intent: 'pi_missing'",
        param: str | None = "id",
        code: str = "resource_missing",
    ) -> stripe.InvalidRequestError:
        return stripe.InvalidRequestError(
            message=message,
            param=param,
            code=code,
        )

    return _create


@pytest.fixture
def permission_error():
    """Create a Stripe PermissionError."""
    return stripe.PermissionError(
        message="The provided key does not have access to account 'acct_x'.",
    )


@pytest.fixture
def rate_limit_error():
    """Create a Stripe RateLimitError."""
    return stripe.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    """Create a Stripe APIConnectionError."""
    return stripe.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def api_error():
    """Create a Stripe APIError."""
    return stripe.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    """Create a Stripe AuthenticationError."""
    return stripe.AuthenticationError(
        message="Invalid API Key provided.",
    )


@pytest.fixture
def signature_verification_error():
    """Create a Stripe SignatureVerificationError."""
    return stripe.SignatureVerificationError(
        message="No signatures found matching the expected signature for payload",
        sig_header="t=1,v1=bad",
    )
