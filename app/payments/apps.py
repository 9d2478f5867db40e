"""
Payments app configuration.

This app provides the Stripe side of mentoring sessions:
- Payment authorization, refunds and cancellations
- Stripe Connect onboarding, balances and payouts for mentors
- Webhook handling
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    name = "payments"
    verbose_name = "Payments"

    def ready(self):
        """
        Import webhook handlers when the app is ready.

        This ensures every handler is registered before the first event.
        """
        from payments.webhooks import handlers  # noqa: F401
