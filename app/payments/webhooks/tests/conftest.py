"""
Pytest fixtures for webhook tests.

Provides event payloads and a helper for producing genuine Stripe-Signature
headers, so verification runs through the real stripe.Webhook code.
"""

import hashlib
import hmac
import json
import time

import pytest
from django.test import RequestFactory

WEBHOOK_SECRET = "whsec_test_webhooks"


@pytest.fixture
def rf():
    """Request factory for creating test requests."""
    return RequestFactory()


@pytest.fixture
def webhook_settings(settings):
    """Webhook secret configured, unverified delivery still allowed."""
    settings.STRIPE_WEBHOOK_SECRET = WEBHOOK_SECRET
    settings.STRIPE_WEBHOOK_ALLOW_UNVERIFIED = True
    return settings


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header for the payload."""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload.decode()}".encode()
    signature = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


@pytest.fixture
def event_payload():
    """Build a Stripe event payload."""

    def _create(event_type: str = "payment_intent.succeeded", obj: dict | None = None) -> dict:
        return {
            "id": "evt_test_123",
            "object": "event",
            "type": event_type,
            "data": {
                "object": obj
                or {
                    "id": "pi_test_123",
                    "object": "payment_intent",
                    "amount": 5000,
                    "currency": "usd",
                }
            },
        }

    return _create


@pytest.fixture
def webhook_request(rf):
    """Create a POST request to the webhook endpoint."""

    def _create(payload, signature: str | None = None):
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        headers = {"HTTP_STRIPE_SIGNATURE": signature} if signature else {}
        return rf.post(
            "/api/stripe-webhook",
            data=body,
            content_type="application/json",
            **headers,
        )

    return _create
