"""
Webhook handling for payment events from Stripe.

This module provides the webhook view, the event type enum and the
handler registry. Events are verified (or, in development, parsed),
dispatched synchronously and acknowledged.

Usage:
    # In urls.py
    from payments.webhooks.views import stripe_webhook

    urlpatterns = [
        path("stripe-webhook", stripe_webhook, name="stripe_webhook"),
    ]
"""

from payments.webhooks.handlers import dispatch_webhook, register_handler
from payments.webhooks.types import WebhookEventType
from payments.webhooks.views import stripe_webhook

__all__ = [
    "WebhookEventType",
    "dispatch_webhook",
    "register_handler",
    "stripe_webhook",
]
