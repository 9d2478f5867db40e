"""
Webhook endpoint views for Stripe.

This module provides the HTTP endpoint for receiving Stripe webhooks.
The view:
1. Verifies the webhook signature (or, in development, parses the body)
2. Dispatches the event to its handler
3. Acknowledges with {"received": true}

Usage:
    # In urls.py
    from payments.webhooks.views import stripe_webhook

    urlpatterns = [
        path("stripe-webhook", stripe_webhook, name="stripe_webhook"),
    ]
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from payments.adapters import get_stripe_adapter
from payments.exceptions import WebhookVerificationError
from payments.webhooks.handlers import dispatch_webhook

if TYPE_CHECKING:
    from typing import Any

    from payments.adapters import StripeAdapter


logger = logging.getLogger(__name__)


def parse_webhook_event(
    adapter: StripeAdapter,
    payload: bytes,
    signature: str,
) -> dict[str, Any]:
    """
    Turn a webhook request body into an event dict.

    With a webhook secret configured and a Stripe-Signature header present
    the signature is verified. Otherwise, only when unverified delivery is
    allowed, the body is parsed as JSON without any verification.

    Raises:
        WebhookVerificationError: Verification failed, body isn't a JSON
            object, or unverified delivery is disabled
    """
    if adapter.config.can_verify_webhooks and signature:
        return adapter.construct_webhook_event(payload, signature)

    if not adapter.config.allow_unverified_webhooks:
        raise WebhookVerificationError(
            "Missing Stripe-Signature header or webhook secret",
            details={"reason": "unverified_rejected"},
        )

    logger.warning(
        "Processing webhook WITHOUT signature verification; "
        "this is insecure and only acceptable in development",
        extra={
            "has_signature": bool(signature),
            "has_webhook_secret": adapter.config.can_verify_webhooks,
        },
    )

    try:
        event = json.loads(payload)
    except ValueError as e:
        raise WebhookVerificationError(
            f"Invalid JSON payload: {e}",
            details={"reason": "invalid_payload"},
        ) from e

    if not isinstance(event, dict):
        raise WebhookVerificationError(
            "Payload must be a JSON object",
            details={"reason": "invalid_payload"},
        )
    return event


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> JsonResponse:
    """
    Receive and dispatch Stripe webhook events.

    Security:
    - Signature verification prevents spoofed webhooks
    - STRIPE_WEBHOOK_ALLOW_UNVERIFIED=False rejects unsigned requests
    - CSRF exemption required for external webhooks
    - Only POST requests accepted

    Returns:
        JsonResponse with status:
        - 200: {"received": true}
        - 400: {"error": "Webhook Error: <reason>"}

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    payload = request.body
    signature = request.headers.get("Stripe-Signature", "")

    try:
        event = parse_webhook_event(get_stripe_adapter(), payload, signature)

        logger.info(
            f"Received Stripe webhook: {event.get('type')}",
            extra={"stripe_event_id": event.get("id"), "event_type": event.get("type")},
        )
        dispatch_webhook(event)
    except WebhookVerificationError as e:
        logger.warning(
            "Webhook rejected",
            extra={"error": e.message, "reason": e.details.get("reason")},
        )
        return JsonResponse({"error": f"Webhook Error: {e.message}"}, status=400)
    except Exception as e:
        logger.error(
            f"Webhook handling failed: {type(e).__name__}",
            exc_info=True,
        )
        return JsonResponse({"error": f"Webhook Error: {e}"}, status=400)

    return JsonResponse({"received": True})
