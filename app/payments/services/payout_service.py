"""
Payout service for sending a mentor's earnings to their bank account.

The connected account's available balance is checked first so the
common "not enough money yet" case gets a clear 400 instead of a Stripe
error.

Usage:
    from payments.services import PayoutService

    result = PayoutService(adapter, mentors).create_payout("m1", 5000, "usd")
    if not result.success and result.error_code == "INSUFFICIENT_BALANCE":
        available = result.details["available"]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

from payments.adapters import CreatePayoutParams, PayoutResult
from payments.services.balance_service import ConnectedMentorMixin

if TYPE_CHECKING:
    from typing import Any

    from mentors import MentorRepository
    from payments.adapters import StripeAdapter


@dataclass
class PayoutOutcome:
    """Created payout, rendered for the API."""

    payout: PayoutResult

    def to_response(self) -> dict[str, Any]:
        return {
            "payoutId": self.payout.id,
            "amount": self.payout.amount,
            "currency": self.payout.currency,
            "status": self.payout.status,
            "arrivalDate": self.payout.arrival_date,
        }


class PayoutService(ConnectedMentorMixin, BaseService):
    """
    Creates payouts on mentors' connected accounts.

    The balance check and the payout are two separate Stripe calls; Stripe
    still rejects a payout that no longer fits.

    Args:
        stripe: Stripe adapter
        mentors: Mentor repository
        statement_descriptor: Text shown on the mentor's bank statement
    """

    def __init__(
        self,
        stripe: StripeAdapter,
        mentors: MentorRepository,
        statement_descriptor: str | None = None,
    ):
        self.stripe = stripe
        self.mentors = mentors
        self.statement_descriptor = statement_descriptor or None

    def create_payout(
        self,
        mentor_id: str,
        amount: int,
        currency: str,
        description: str | None = None,
    ) -> ServiceResult[PayoutOutcome]:
        """
        Pay out part of a mentor's available balance.

        Returns:
            ServiceResult with PayoutOutcome, or a failure with
            INVALID_AMOUNT, MENTOR_NOT_FOUND, STRIPE_ACCOUNT_NOT_CONNECTED
            or INSUFFICIENT_BALANCE (details carry the available amount)
        """
        logger = self.get_logger()
        currency = currency.lower()

        if not amount or amount <= 0:
            return ServiceResult.failure(
                "Valid amount is required",
                error_code="INVALID_AMOUNT",
            )

        lookup = self.get_connected_mentor(mentor_id)
        if not lookup:
            return ServiceResult.failure(lookup.error, error_code=lookup.error_code)
        mentor = lookup.data

        balance = self.stripe.retrieve_balance(mentor.stripe_account_id)
        available = balance.available_amount(currency)
        if available < amount:
            logger.warning(
                "Payout exceeds available balance",
                extra={
                    "mentor_id": mentor_id,
                    "amount": amount,
                    "available": available,
                    "currency": currency,
                },
            )
            return ServiceResult.failure(
                "Insufficient balance",
                error_code="INSUFFICIENT_BALANCE",
                details={"available": available},
            )

        payout = self.stripe.create_payout(
            CreatePayoutParams(
                account_id=mentor.stripe_account_id,
                amount=amount,
                currency=currency,
                description=description
                or f"Payout for mentor {mentor.data.get('name') or mentor_id}",
                statement_descriptor=self.statement_descriptor,
            )
        )

        logger.info(
            "Payout created",
            extra={
                "mentor_id": mentor_id,
                "payout_id": payout.id,
                "amount": payout.amount,
                "status": payout.status,
            },
        )
        return ServiceResult.success(PayoutOutcome(payout=payout))
