"""
Tests for the payment services.

Services are exercised with a mocked StripeAdapter and a mentor repository
over a fresh in-memory document store.

Tests cover:
- Authorization holds (manual capture)
- Refund vs cancel branching on PaymentIntent status
- Connect onboarding and its idempotency on stripeAccountId
- Balance lookups and payouts for connected mentors
"""

from unittest.mock import MagicMock

import pytest

from core.exceptions import ConflictError
from documents import COLLECTIONS
from documents.backends.locmem import LocMemDocumentStore
from mentors import MentorRepository
from payments.adapters import (
    AccountLinkResult,
    BalanceResult,
    ConnectedAccountResult,
    PaymentIntentResult,
    PayoutResult,
    RefundResult,
    StripeAdapter,
)
from payments.exceptions import StripeAPIUnavailableError, StripeInvalidRequestError
from payments.services import (
    AuthorizationService,
    ConnectService,
    MentorBalanceService,
    PayoutService,
    RefundService,
)
from payments.tests.factories import MentorDocumentFactory


@pytest.fixture
def stripe_adapter():
    """StripeAdapter double; each test sets the return values it needs."""
    return MagicMock(spec=StripeAdapter)


@pytest.fixture
def document_store():
    return LocMemDocumentStore()


@pytest.fixture
def mentors(document_store):
    return MentorRepository(document_store)


def _intent(status: str, **kwargs) -> PaymentIntentResult:
    return PaymentIntentResult(
        id=kwargs.pop("id", "pi_test123"),
        status=status,
        amount=kwargs.pop("amount", 5000),
        currency=kwargs.pop("currency", "usd"),
        **kwargs,
    )


# =============================================================================
# AuthorizationService Tests
# =============================================================================


class TestAuthorizationService:
    """Tests for AuthorizationService.authorize."""

    def test_creates_manual_capture_intent(self, stripe_adapter):
        stripe_adapter.create_payment_intent.return_value = _intent(
            "requires_payment_method", client_secret="pi_test123_secret"
        )

        result = AuthorizationService(stripe_adapter).authorize(
            amount=5000,
            currency="USD",
            description="60 min session",
            mentor_account_id="acct_123",
        )

        assert result.success is True
        assert result.data.client_secret == "pi_test123_secret"
        params = stripe_adapter.create_payment_intent.call_args.args[0]
        assert params.capture_method == "manual"
        assert params.currency == "usd"
        assert params.metadata == {
            "description": "60 min session",
            "mentorStripeAccountId": "acct_123",
        }

    def test_metadata_omits_missing_values(self, stripe_adapter):
        """Absent description and account id are not sent as empty strings."""
        stripe_adapter.create_payment_intent.return_value = _intent("requires_payment_method")

        AuthorizationService(stripe_adapter).authorize(amount=100, currency="usd")

        params = stripe_adapter.create_payment_intent.call_args.args[0]
        assert params.metadata == {}
        assert params.description is None

    @pytest.mark.parametrize("amount", [0, -5, None])
    def test_rejects_non_positive_amount(self, stripe_adapter, amount):
        result = AuthorizationService(stripe_adapter).authorize(amount=amount, currency="usd")

        assert result.success is False
        assert result.error == "Valid amount is required"
        assert result.error_code == "INVALID_AMOUNT"
        stripe_adapter.create_payment_intent.assert_not_called()

    def test_stripe_errors_propagate(self, stripe_adapter):
        stripe_adapter.create_payment_intent.side_effect = StripeAPIUnavailableError(
            "Stripe is down"
        )

        with pytest.raises(StripeAPIUnavailableError):
            AuthorizationService(stripe_adapter).authorize(amount=100, currency="usd")


# =============================================================================
# RefundService Tests
# =============================================================================


class TestRefundService:
    """Tests for RefundService.refund_or_cancel."""

    def test_requires_capture_is_canceled(self, stripe_adapter):
        """An uncaptured authorization is released rather than refunded."""
        stripe_adapter.retrieve_payment_intent.return_value = _intent("requires_capture")
        stripe_adapter.cancel_payment_intent.return_value = _intent("canceled")

        result = RefundService(stripe_adapter).refund_or_cancel("pi_test123")

        assert result.success is True
        assert result.data.canceled is True
        assert result.data.to_response() == {
            "id": "pi_test123",
            "status": "canceled",
            "canceled": True,
        }
        stripe_adapter.cancel_payment_intent.assert_called_once_with(
            "pi_test123", reason="requested_by_customer"
        )
        stripe_adapter.create_refund.assert_not_called()

    def test_cancel_ignores_amount(self, stripe_adapter):
        stripe_adapter.retrieve_payment_intent.return_value = _intent("requires_capture")
        stripe_adapter.cancel_payment_intent.return_value = _intent("canceled")

        result = RefundService(stripe_adapter).refund_or_cancel("pi_test123", amount=100)

        assert result.data.canceled is True
        stripe_adapter.create_refund.assert_not_called()

    def test_succeeded_is_refunded(self, stripe_adapter):
        stripe_adapter.retrieve_payment_intent.return_value = _intent("succeeded")
        stripe_adapter.create_refund.return_value = RefundResult(
            id="re_123",
            amount=5000,
            currency="usd",
            status="succeeded",
            payment_intent_id="pi_test123",
            created=1700000000,
        )

        result = RefundService(stripe_adapter).refund_or_cancel(
            "pi_test123", reason="duplicate"
        )

        assert result.success is True
        assert result.data.to_response() == {
            "id": "re_123",
            "payment_intent": "pi_test123",
            "amount": 5000,
            "status": "succeeded",
            "created": 1700000000,
        }
        params = stripe_adapter.create_refund.call_args.args[0]
        assert params.reason == "duplicate"
        assert params.amount is None
        stripe_adapter.cancel_payment_intent.assert_not_called()

    def test_partial_refund_passes_amount(self, stripe_adapter):
        stripe_adapter.retrieve_payment_intent.return_value = _intent("succeeded")
        stripe_adapter.create_refund.return_value = RefundResult(
            id="re_123",
            amount=1000,
            currency="usd",
            status="succeeded",
            payment_intent_id="pi_test123",
        )

        RefundService(stripe_adapter).refund_or_cancel("pi_test123", amount=1000)

        assert stripe_adapter.create_refund.call_args.args[0].amount == 1000

    @pytest.mark.parametrize(
        "status",
        ["requires_payment_method", "requires_confirmation", "processing", "canceled"],
    )
    def test_other_statuses_are_rejected(self, stripe_adapter, status):
        stripe_adapter.retrieve_payment_intent.return_value = _intent(status)

        result = RefundService(stripe_adapter).refund_or_cancel("pi_test123")

        assert result.success is False
        assert result.error == f"Payment cannot be refunded: status is {status}"
        assert result.error_code == "NON_REFUNDABLE_STATE"
        stripe_adapter.cancel_payment_intent.assert_not_called()
        stripe_adapter.create_refund.assert_not_called()

    def test_missing_payment_intent_id(self, stripe_adapter):
        result = RefundService(stripe_adapter).refund_or_cancel("")

        assert result.error == "Payment intent ID is required"
        stripe_adapter.retrieve_payment_intent.assert_not_called()

    def test_unknown_payment_intent_propagates(self, stripe_adapter):
        stripe_adapter.retrieve_payment_intent.side_effect = StripeInvalidRequestError(
            "No such payment_intent"
        )

        with pytest.raises(StripeInvalidRequestError):
            RefundService(stripe_adapter).refund_or_cancel("pi_missing")


# =============================================================================
# ConnectService Tests
# =============================================================================


class TestConnectService:
    """Tests for ConnectService.create_account."""

    ONBOARDING_URL = "https://app.example.com/dashboard"

    @pytest.fixture
    def connect_stripe(self, stripe_adapter):
        stripe_adapter.create_connected_account.return_value = ConnectedAccountResult(
            id="acct_new"
        )
        stripe_adapter.create_account_link.return_value = AccountLinkResult(
            url="https://connect.stripe.com/setup/e/acct_new/abc"
        )
        return stripe_adapter

    def _create(self, service, mentor_id="m1"):
        return service.create_account(
            mentor_id=mentor_id,
            email="ada@example.com",
            country="us",
            onboarding_url=self.ONBOARDING_URL,
        )

    def test_creates_and_links_account(self, connect_stripe, mentors, document_store):
        document_store.put_document(COLLECTIONS.MENTORS, "m1", MentorDocumentFactory())

        result = self._create(ConnectService(connect_stripe, mentors))

        assert result.success is True
        assert result.data.to_response() == {
            "accountId": "acct_new",
            "status": "pending",
            "accountLink": "https://connect.stripe.com/setup/e/acct_new/abc",
        }
        assert mentors.get("m1").stripe_account_id == "acct_new"
        params = connect_stripe.create_connected_account.call_args.args[0]
        assert params.country == "US"
        connect_stripe.create_account_link.assert_called_once_with(
            "acct_new",
            refresh_url=self.ONBOARDING_URL,
            return_url=self.ONBOARDING_URL,
        )

    def test_existing_account_is_returned(self, connect_stripe, mentors, document_store):
        """A mentor with stripeAccountId never gets a second account."""
        document_store.put_document(
            COLLECTIONS.MENTORS, "m1", MentorDocumentFactory(stripeAccountId="acct_old")
        )

        result = self._create(ConnectService(connect_stripe, mentors))

        assert result.data.existing is True
        assert result.data.to_response() == {
            "accountId": "acct_old",
            "message": "Mentor already has a Stripe account",
        }
        connect_stripe.create_connected_account.assert_not_called()
        connect_stripe.create_account_link.assert_not_called()

    def test_second_request_is_idempotent(self, connect_stripe, mentors, document_store):
        document_store.put_document(COLLECTIONS.MENTORS, "m1", MentorDocumentFactory())
        service = ConnectService(connect_stripe, mentors)

        self._create(service)
        second = self._create(service)

        assert second.data.existing is True
        assert second.data.account_id == "acct_new"
        assert connect_stripe.create_connected_account.call_count == 1

    def test_missing_mentor_creates_unlinked_account(self, connect_stripe, mentors):
        result = self._create(ConnectService(connect_stripe, mentors), mentor_id="ghost")

        assert result.success is True
        assert result.data.account_id == "acct_new"
        assert mentors.get("ghost") is None

    def test_missing_mentor_rejected_when_required(self, connect_stripe, mentors):
        service = ConnectService(connect_stripe, mentors, require_mentor_record=True)

        result = self._create(service, mentor_id="ghost")

        assert result.error_code == "MENTOR_NOT_FOUND"
        connect_stripe.create_connected_account.assert_not_called()

    def test_link_conflict_propagates(self, connect_stripe, document_store):
        """A different account appearing mid-request is not overwritten."""
        document_store.put_document(COLLECTIONS.MENTORS, "m1", MentorDocumentFactory())
        mentors = MagicMock(spec=MentorRepository)
        mentors.get.return_value = MentorRepository(document_store).get("m1")
        mentors.link_stripe_account.side_effect = ConflictError(
            "Mentor is already linked to another Stripe account",
            error_code="STRIPE_ACCOUNT_ALREADY_LINKED",
        )

        with pytest.raises(ConflictError):
            self._create(ConnectService(connect_stripe, mentors))

        connect_stripe.create_account_link.assert_not_called()


# =============================================================================
# Balance and Payout Tests
# =============================================================================


@pytest.fixture
def connected_mentor(document_store):
    document_store.put_document(
        COLLECTIONS.MENTORS,
        "m1",
        MentorDocumentFactory(name="Ada", stripeAccountId="acct_123"),
    )
    return "m1"


class TestMentorBalanceService:
    """Tests for MentorBalanceService.get_balance."""

    def test_returns_balance(self, stripe_adapter, mentors, connected_mentor):
        stripe_adapter.retrieve_balance.return_value = BalanceResult(
            available=[{"amount": 12000, "currency": "usd"}]
        )

        result = MentorBalanceService(stripe_adapter, mentors).get_balance(connected_mentor)

        assert result.success is True
        assert result.data.available_amount("usd") == 12000
        stripe_adapter.retrieve_balance.assert_called_once_with("acct_123")

    def test_unknown_mentor(self, stripe_adapter, mentors):
        result = MentorBalanceService(stripe_adapter, mentors).get_balance("ghost")

        assert result.error_code == "MENTOR_NOT_FOUND"
        stripe_adapter.retrieve_balance.assert_not_called()

    def test_mentor_without_account(self, stripe_adapter, mentors, document_store):
        document_store.put_document(COLLECTIONS.MENTORS, "m2", MentorDocumentFactory())

        result = MentorBalanceService(stripe_adapter, mentors).get_balance("m2")

        assert result.error_code == "STRIPE_ACCOUNT_NOT_CONNECTED"


class TestPayoutService:
    """Tests for PayoutService.create_payout."""

    @pytest.fixture
    def payout_stripe(self, stripe_adapter):
        stripe_adapter.retrieve_balance.return_value = BalanceResult(
            available=[
                {"amount": 12000, "currency": "usd"},
                {"amount": 900, "currency": "eur"},
            ]
        )
        stripe_adapter.create_payout.return_value = PayoutResult(
            id="po_123",
            amount=5000,
            currency="usd",
            status="pending",
            arrival_date=1700086400,
        )
        return stripe_adapter

    def test_creates_payout(self, payout_stripe, mentors, connected_mentor):
        service = PayoutService(payout_stripe, mentors, statement_descriptor="MENTOR PAYOUT")

        result = service.create_payout(connected_mentor, amount=5000, currency="USD")

        assert result.success is True
        assert result.data.to_response() == {
            "payoutId": "po_123",
            "amount": 5000,
            "currency": "usd",
            "status": "pending",
            "arrivalDate": 1700086400,
        }
        params = payout_stripe.create_payout.call_args.args[0]
        assert params.account_id == "acct_123"
        assert params.description == "Payout for mentor Ada"
        assert params.statement_descriptor == "MENTOR PAYOUT"

    def test_insufficient_balance(self, payout_stripe, mentors, connected_mentor):
        """Only the requested currency counts toward the balance."""
        result = PayoutService(payout_stripe, mentors).create_payout(
            connected_mentor, amount=1000, currency="eur"
        )

        assert result.success is False
        assert result.error == "Insufficient balance"
        assert result.error_code == "INSUFFICIENT_BALANCE"
        assert result.details == {"available": 900}
        payout_stripe.create_payout.assert_not_called()

    def test_exact_balance_is_allowed(self, payout_stripe, mentors, connected_mentor):
        result = PayoutService(payout_stripe, mentors).create_payout(
            connected_mentor, amount=12000, currency="usd", description="March earnings"
        )

        assert result.success is True
        assert payout_stripe.create_payout.call_args.args[0].description == "March earnings"

    def test_unconnected_mentor(self, payout_stripe, mentors, document_store):
        document_store.put_document(COLLECTIONS.MENTORS, "m2", MentorDocumentFactory())

        result = PayoutService(payout_stripe, mentors).create_payout(
            "m2", amount=100, currency="usd"
        )

        assert result.error_code == "STRIPE_ACCOUNT_NOT_CONNECTED"
        payout_stripe.retrieve_balance.assert_not_called()

    def test_invalid_amount(self, payout_stripe, mentors, connected_mentor):
        result = PayoutService(payout_stripe, mentors).create_payout(
            connected_mentor, amount=0, currency="usd"
        )

        assert result.error_code == "INVALID_AMOUNT"
