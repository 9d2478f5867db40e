"""
Payment services for coordinating payment operations.

This module provides:
- AuthorizationService: Places manual-capture authorization holds
- RefundService: Cancels or refunds a PaymentIntent by status
- ConnectService: Onboards mentors to Stripe Connect
- MentorBalanceService: Reads connected-account balances
- PayoutService: Pays out connected-account balances

Services take their collaborators in the constructor; the views build
them from get_stripe_adapter() and get_mentor_repository().

Usage:
    from payments.services import RefundService

    result = RefundService(get_stripe_adapter()).refund_or_cancel(
        "pi_123",
        reason="requested_by_customer",
    )
"""

from payments.services.authorization_service import AuthorizationService
from payments.services.balance_service import ConnectedMentorMixin, MentorBalanceService
from payments.services.connect_service import ConnectAccountOutcome, ConnectService
from payments.services.payout_service import PayoutOutcome, PayoutService
from payments.services.refund_service import RefundOutcome, RefundService

__all__ = [
    "AuthorizationService",
    "ConnectAccountOutcome",
    "ConnectService",
    "ConnectedMentorMixin",
    "MentorBalanceService",
    "PayoutOutcome",
    "PayoutService",
    "RefundOutcome",
    "RefundService",
]
