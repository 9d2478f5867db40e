"""
Refund service for returning money to mentees.

What "refund" means depends on where the PaymentIntent is:

    requires_capture  -> cancel the intent (releases the authorization hold)
    succeeded         -> create a Refund (full, or partial when amount given)
    anything else     -> rejected, nothing is sent to Stripe

Usage:
    from payments.services import RefundService

    result = RefundService(get_stripe_adapter()).refund_or_cancel("pi_123")
    if result.success:
        body = result.data.to_response()
    else:
        print(f"Refund failed: {result.error}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

from payments.adapters import CreateRefundParams, PaymentIntentResult, RefundResult

if TYPE_CHECKING:
    from typing import Any

    from payments.adapters import StripeAdapter


# =============================================================================
# Constants
# =============================================================================

DEFAULT_REFUND_REASON = "requested_by_customer"

# Authorized but not captured: cancel instead of refunding
CANCELABLE_STATUS = "requires_capture"

# Captured: money moved, refund it
REFUNDABLE_STATUS = "succeeded"


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class RefundOutcome:
    """
    Result of a refund request.

    Exactly one of intent (cancel branch) or refund (refund branch) is set.

    Attributes:
        canceled: True when the authorization was released
        intent: Canceled PaymentIntent
        refund: Created Refund
    """

    canceled: bool
    intent: PaymentIntentResult | None = None
    refund: RefundResult | None = None

    def to_response(self) -> dict[str, Any]:
        if self.canceled:
            return {
                "id": self.intent.id,
                "status": self.intent.status,
                "canceled": True,
            }
        return {
            "id": self.refund.id,
            "payment_intent": self.refund.payment_intent_id,
            "amount": self.refund.amount,
            "status": self.refund.status,
            "created": self.refund.created,
        }


# =============================================================================
# Service
# =============================================================================


class RefundService(BaseService):
    """
    Cancels or refunds a PaymentIntent depending on its status.

    The status is read once and acted on; a concurrent capture between the
    read and the cancel surfaces as a Stripe error.
    """

    def __init__(self, stripe: StripeAdapter):
        self.stripe = stripe

    def refund_or_cancel(
        self,
        payment_intent_id: str,
        reason: str | None = None,
        amount: int | None = None,
    ) -> ServiceResult[RefundOutcome]:
        """
        Refund a captured payment or release an uncaptured authorization.

        Args:
            payment_intent_id: Stripe PaymentIntent ID (pi_xxx)
            reason: Refund/cancellation reason (default requested_by_customer)
            amount: Partial refund amount; not used when canceling

        Returns:
            ServiceResult with RefundOutcome, or a failure with
            NON_REFUNDABLE_STATE when the intent is in any other status
        """
        logger = self.get_logger()
        reason = reason or DEFAULT_REFUND_REASON

        if not payment_intent_id:
            return ServiceResult.failure(
                "Payment intent ID is required",
                error_code="PAYMENT_INTENT_REQUIRED",
            )

        intent = self.stripe.retrieve_payment_intent(payment_intent_id)

        if intent.status == CANCELABLE_STATUS:
            canceled = self.stripe.cancel_payment_intent(intent.id, reason=reason)
            logger.info(
                "Authorization canceled instead of refunded",
                extra={"payment_intent_id": intent.id, "reason": reason},
            )
            return ServiceResult.success(RefundOutcome(canceled=True, intent=canceled))

        if intent.status == REFUNDABLE_STATUS:
            refund = self.stripe.create_refund(
                CreateRefundParams(
                    payment_intent_id=intent.id,
                    reason=reason,
                    amount=amount,
                )
            )
            logger.info(
                "Refund created",
                extra={
                    "payment_intent_id": intent.id,
                    "refund_id": refund.id,
                    "amount": refund.amount,
                    "partial": amount is not None,
                },
            )
            return ServiceResult.success(RefundOutcome(canceled=False, refund=refund))

        logger.warning(
            "Payment intent not refundable",
            extra={"payment_intent_id": intent.id, "status": intent.status},
        )
        return ServiceResult.failure(
            f"Payment cannot be refunded: status is {intent.status}",
            error_code="NON_REFUNDABLE_STATE",
        )
