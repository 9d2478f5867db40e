"""
Authorization service for mentoring session payments.

Creates PaymentIntents with capture_method="manual": the card is authorized
when the mentee confirms on the front-end, and funds stay on hold until
captured or canceled elsewhere.

Usage:
    from payments.services import AuthorizationService

    result = AuthorizationService(get_stripe_adapter()).authorize(
        amount=5000,
        currency="usd",
        description="60 min session",
        mentor_account_id="acct_123",
    )
    if result.success:
        client_secret = result.data.client_secret
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

from payments.adapters import CreatePaymentIntentParams, PaymentIntentResult

if TYPE_CHECKING:
    from payments.adapters import StripeAdapter


class AuthorizationService(BaseService):
    """
    Places authorization holds for session payments.

    Stripe errors propagate; the view answers them with a generic 500.
    """

    def __init__(self, stripe: StripeAdapter):
        self.stripe = stripe

    def authorize(
        self,
        amount: int | None,
        currency: str,
        description: str | None = None,
        mentor_account_id: str | None = None,
    ) -> ServiceResult[PaymentIntentResult]:
        """
        Create a manual-capture PaymentIntent.

        Args:
            amount: Amount in the smallest currency unit
            currency: ISO 4217 currency code
            description: Stored as description and in metadata
            mentor_account_id: Mentor's connected account, metadata only

        Returns:
            ServiceResult with the PaymentIntentResult, or a failure
            with INVALID_AMOUNT when the amount isn't positive
        """
        logger = self.get_logger()

        if not amount or amount <= 0:
            logger.warning("Rejected payment intent with invalid amount", extra={"amount": amount})
            return ServiceResult.failure(
                "Valid amount is required",
                error_code="INVALID_AMOUNT",
            )

        metadata = {
            key: value
            for key, value in {
                "description": description,
                "mentorStripeAccountId": mentor_account_id,
            }.items()
            if value
        }

        intent = self.stripe.create_payment_intent(
            CreatePaymentIntentParams(
                amount=amount,
                currency=currency.lower(),
                description=description or None,
                metadata=metadata,
                capture_method="manual",
            )
        )

        logger.info(
            "Payment authorization created",
            extra={
                "payment_intent_id": intent.id,
                "amount": intent.amount,
                "currency": intent.currency,
                "mentor_account_id": mentor_account_id,
            },
        )
        return ServiceResult.success(intent)
