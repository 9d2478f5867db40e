"""
Connect onboarding service.

Creates an Express connected account for a mentor, records its id on the
mentor document and returns a hosted onboarding link. A mentor that
already has an account id is answered from the document alone.

Usage:
    from payments.services import ConnectService

    service = ConnectService(get_stripe_adapter(), get_mentor_repository())
    result = service.create_account(
        mentor_id="m1",
        email="ada@example.com",
        country="US",
        onboarding_url="https://app.example.com/dashboard",
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

from payments.adapters import CreateConnectedAccountParams

if TYPE_CHECKING:
    from typing import Any

    from mentors import MentorRepository
    from payments.adapters import StripeAdapter


ALREADY_CONNECTED_MESSAGE = "Mentor already has a Stripe account"


@dataclass
class ConnectAccountOutcome:
    """
    Result of a connect request.

    Attributes:
        account_id: Connected account id (new or pre-existing)
        existing: True when no account was created
        status: "complete" or "pending" for new accounts
        account_link: Onboarding URL for new accounts
    """

    account_id: str
    existing: bool = False
    status: str | None = None
    account_link: str | None = None

    def to_response(self) -> dict[str, Any]:
        if self.existing:
            return {"accountId": self.account_id, "message": ALREADY_CONNECTED_MESSAGE}
        return {
            "accountId": self.account_id,
            "status": self.status,
            "accountLink": self.account_link,
        }


class ConnectService(BaseService):
    """
    Onboards mentors to Stripe Connect.

    Steps run in order with no rollback: a failure after the account is
    created leaves the account in Stripe (and possibly linked), which the
    next request picks up through the mentor document.

    Args:
        stripe: Stripe adapter
        mentors: Mentor repository
        require_mentor_record: Reject mentors without a document instead of
            creating an unlinked account
    """

    def __init__(
        self,
        stripe: StripeAdapter,
        mentors: MentorRepository,
        require_mentor_record: bool = False,
    ):
        self.stripe = stripe
        self.mentors = mentors
        self.require_mentor_record = require_mentor_record

    def create_account(
        self,
        mentor_id: str,
        email: str,
        country: str,
        onboarding_url: str,
    ) -> ServiceResult[ConnectAccountOutcome]:
        """
        Create (or return) the mentor's connected account.

        Args:
            mentor_id: Mentor document id
            email: Mentor email for the account
            country: ISO 3166-1 alpha-2 country code
            onboarding_url: Refresh and return URL for the onboarding link

        Returns:
            ServiceResult with ConnectAccountOutcome, or a failure with
            MENTOR_NOT_FOUND when records are required and missing
        """
        logger = self.get_logger()

        mentor = self.mentors.get(mentor_id)

        if mentor is not None and mentor.has_stripe_account:
            logger.info(
                "Mentor already connected",
                extra={"mentor_id": mentor_id, "account_id": mentor.stripe_account_id},
            )
            return ServiceResult.success(
                ConnectAccountOutcome(account_id=mentor.stripe_account_id, existing=True)
            )

        if mentor is None:
            if self.require_mentor_record:
                return ServiceResult.failure(
                    "Mentor not found",
                    error_code="MENTOR_NOT_FOUND",
                )
            logger.warning(
                "Creating Connect account for mentor without a record",
                extra={"mentor_id": mentor_id},
            )

        account = self.stripe.create_connected_account(
            CreateConnectedAccountParams(
                mentor_id=mentor_id,
                email=email,
                country=country.upper(),
            )
        )

        if mentor is not None:
            self.mentors.link_stripe_account(mentor_id, account.id)

        link = self.stripe.create_account_link(
            account.id,
            refresh_url=onboarding_url,
            return_url=onboarding_url,
        )

        logger.info(
            "Connect account created",
            extra={
                "mentor_id": mentor_id,
                "account_id": account.id,
                "linked": mentor is not None,
                "status": account.onboarding_status,
            },
        )
        return ServiceResult.success(
            ConnectAccountOutcome(
                account_id=account.id,
                status=account.onboarding_status,
                account_link=link.url,
            )
        )
