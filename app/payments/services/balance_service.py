"""
Mentor balance service.

Looks up the mentor's connected account on the mentor document and reads
its balance from Stripe.

Usage:
    from payments.services import MentorBalanceService

    result = MentorBalanceService(adapter, mentors).get_balance("m1")
    if result.success:
        available = result.data.available
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from mentors import MentorRecord, MentorRepository
    from payments.adapters import BalanceResult, StripeAdapter


class ConnectedMentorMixin:
    """Resolves a mentor id to a mentor with a connected account."""

    mentors: MentorRepository

    def get_connected_mentor(self, mentor_id: str) -> ServiceResult[MentorRecord]:
        mentor = self.mentors.get(mentor_id)
        if mentor is None:
            return ServiceResult.failure("Mentor not found", error_code="MENTOR_NOT_FOUND")
        if not mentor.has_stripe_account:
            return ServiceResult.failure(
                "Mentor has no connected Stripe account",
                error_code="STRIPE_ACCOUNT_NOT_CONNECTED",
            )
        return ServiceResult.success(mentor)


class MentorBalanceService(ConnectedMentorMixin, BaseService):
    """Reads connected-account balances."""

    def __init__(self, stripe: StripeAdapter, mentors: MentorRepository):
        self.stripe = stripe
        self.mentors = mentors

    def get_balance(self, mentor_id: str) -> ServiceResult[BalanceResult]:
        """
        Get the balance of a mentor's connected account.

        Returns:
            ServiceResult with BalanceResult, or a failure with
            MENTOR_NOT_FOUND / STRIPE_ACCOUNT_NOT_CONNECTED
        """
        lookup = self.get_connected_mentor(mentor_id)
        if not lookup:
            self.get_logger().warning(
                "Balance requested for unavailable mentor",
                extra={"mentor_id": mentor_id, "error_code": lookup.error_code},
            )
            return ServiceResult.failure(lookup.error, error_code=lookup.error_code)

        balance = self.stripe.retrieve_balance(lookup.data.stripe_account_id)
        return ServiceResult.success(balance)
