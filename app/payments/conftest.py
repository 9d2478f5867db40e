"""
Pytest fixtures shared by the payments test packages.

Every test runs against the in-memory document store and a Stripe adapter
built from test settings. The Stripe SDK itself is patched per resource.

Usage:
    def test_balance(api_client, mentor_with_account, mock_stripe_balance):
        response = api_client.get(f"/api/mentor-balance/{mentor_with_account}")
        assert response.status_code == 200
"""

from unittest.mock import patch

import pytest

from documents import COLLECTIONS, get_document_store
from payments.tests.factories import (
    AccountDataFactory,
    AccountLinkDataFactory,
    BalanceDataFactory,
    MentorDocumentFactory,
    MockStripeObject,
    PaymentIntentDataFactory,
    PayoutDataFactory,
    RefundDataFactory,
    stripe_object,
)


# =============================================================================
# Document Store Fixtures
# =============================================================================


@pytest.fixture
def store():
    """The configured (locmem) document store, emptied after the test."""
    document_store = get_document_store()
    yield document_store
    document_store.clear()


@pytest.fixture
def mentor_without_account(store):
    """Mentor document that has not started Connect onboarding."""
    store.put_document(COLLECTIONS.MENTORS, "mentor-new", MentorDocumentFactory())
    return "mentor-new"


@pytest.fixture
def mentor_with_account(store):
    """Mentor document linked to acct_existing."""
    store.put_document(
        COLLECTIONS.MENTORS,
        "mentor-connected",
        MentorDocumentFactory(stripeAccountId="acct_existing"),
    )
    return "mentor-connected"


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_payment_intent():
    """Mock stripe.PaymentIntent API."""
    with patch("stripe.PaymentIntent") as mock:
        mock.create.return_value = stripe_object(PaymentIntentDataFactory)
        mock.retrieve.return_value = stripe_object(
            PaymentIntentDataFactory, status="succeeded"
        )
        mock.cancel.return_value = stripe_object(
            PaymentIntentDataFactory, status="canceled"
        )
        yield mock


@pytest.fixture
def mock_stripe_refund():
    """Mock stripe.Refund API."""
    with patch("stripe.Refund") as mock:
        mock.create.return_value = stripe_object(RefundDataFactory)
        yield mock


@pytest.fixture
def mock_stripe_account():
    """Mock stripe.Account and stripe.AccountLink APIs."""
    with patch("stripe.Account") as account, patch("stripe.AccountLink") as link:
        account.create.return_value = stripe_object(AccountDataFactory, id="acct_new")
        link.create.return_value = stripe_object(
            AccountLinkDataFactory,
            url="https://connect.stripe.com/setup/e/acct_new/abc",
        )
        yield account, link


@pytest.fixture
def mock_stripe_balance():
    """Mock stripe.Balance API."""
    with patch("stripe.Balance") as mock:
        mock.retrieve.return_value = stripe_object(BalanceDataFactory)
        yield mock


@pytest.fixture
def mock_stripe_payout():
    """Mock stripe.Payout API."""
    with patch("stripe.Payout") as mock:
        mock.create.return_value = stripe_object(PayoutDataFactory)
        yield mock


@pytest.fixture
def mock_stripe_webhook():
    """Mock stripe.Webhook API."""
    with patch("stripe.Webhook") as mock:
        mock.construct_event.return_value = MockStripeObject(
            {
                "id": "evt_test123",
                "type": "payment_intent.succeeded",
                "data": {
                    "object": {
                        "id": "pi_test123",
                        "object": "payment_intent",
                    }
                },
            }
        )
        yield mock
