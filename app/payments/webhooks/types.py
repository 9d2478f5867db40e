"""
Stripe webhook event types.

Only the event types this service reacts to are enumerated; everything
else resolves to UNHANDLED and is logged and acknowledged.
"""

from __future__ import annotations

from django.db import models


class WebhookEventType(models.TextChoices):
    """
    Stripe event types with a registered handler.

    Usage:
        event_type = WebhookEventType.resolve(event.get("type"))
        if event_type is WebhookEventType.UNHANDLED:
            ...
    """

    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded", "Payment intent succeeded"
    PAYMENT_INTENT_PAYMENT_FAILED = (
        "payment_intent.payment_failed",
        "Payment intent payment failed",
    )
    PAYMENT_INTENT_CANCELED = "payment_intent.canceled", "Payment intent canceled"
    ACCOUNT_UPDATED = "account.updated", "Connected account updated"
    UNHANDLED = "unhandled", "Unhandled event type"

    @classmethod
    def resolve(cls, raw_type: str | None) -> WebhookEventType:
        """Map a Stripe event type string to a member, UNHANDLED if unknown."""
        try:
            return cls(raw_type)
        except ValueError:
            return cls.UNHANDLED
