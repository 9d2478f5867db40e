"""
Payments app for Stripe integration.

This app handles:
- Session payment authorization (manual capture PaymentIntents)
- Refunds, or cancellation of uncaptured authorizations
- Mentor onboarding to Stripe Connect (Express accounts)
- Mentor balances and payouts
- Webhook event handling

Related apps:
    - mentors: Mentor records carrying stripeAccountId
    - documents: Document store the mentor records live in

Usage:
    from payments.adapters import get_stripe_adapter
    from payments.services import RefundService

    result = RefundService(get_stripe_adapter()).refund_or_cancel("pi_123")
"""
