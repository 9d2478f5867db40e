"""
Tests for webhook handlers.

Tests cover:
- Event type resolution
- Handler registry and dispatch
- Log-only handlers for each event type
"""

import logging

import pytest

from payments.webhooks.handlers import (
    WEBHOOK_HANDLERS,
    dispatch_webhook,
    handle_account_updated,
    handle_payment_intent_payment_failed,
)
from payments.webhooks.types import WebhookEventType


class TestWebhookEventType:
    """Tests for WebhookEventType.resolve."""

    @pytest.mark.parametrize(
        "raw_type,expected",
        [
            ("payment_intent.succeeded", WebhookEventType.PAYMENT_INTENT_SUCCEEDED),
            ("payment_intent.payment_failed", WebhookEventType.PAYMENT_INTENT_PAYMENT_FAILED),
            ("payment_intent.canceled", WebhookEventType.PAYMENT_INTENT_CANCELED),
            ("account.updated", WebhookEventType.ACCOUNT_UPDATED),
            ("charge.refunded", WebhookEventType.UNHANDLED),
            (None, WebhookEventType.UNHANDLED),
        ],
    )
    def test_resolve(self, raw_type, expected):
        assert WebhookEventType.resolve(raw_type) is expected


class TestHandlerRegistry:
    """Tests for the handler registry."""

    def test_every_event_type_has_a_handler(self):
        """Dispatch never falls through to a missing handler."""
        assert set(WEBHOOK_HANDLERS) == set(WebhookEventType)

    def test_dispatch_routes_by_type(self, event_payload):
        result = dispatch_webhook(event_payload("payment_intent.succeeded"))

        assert result.success is True
        assert result.data == "pi_test_123"

    def test_dispatch_unknown_type(self, event_payload):
        result = dispatch_webhook(event_payload("invoice.paid"))

        assert result.success is True
        assert result.data is None

    def test_dispatch_tolerates_missing_data(self):
        """Malformed but parseable events are acknowledged."""
        result = dispatch_webhook({"id": "evt_1", "type": "payment_intent.canceled"})

        assert result.success is True


class TestHandlers:
    """Tests for individual handlers."""

    def test_payment_failed_logs_failure_reason(self, event_payload, caplog):
        event = event_payload(
            "payment_intent.payment_failed",
            obj={
                "id": "pi_failed",
                "last_payment_error": {"code": "card_declined", "message": "Declined"},
            },
        )

        with caplog.at_level(logging.WARNING, logger="payments.webhooks.handlers"):
            result = handle_payment_intent_payment_failed(event)

        assert result.data == "pi_failed"
        assert "pi_failed payment failed" in caplog.text

    def test_account_updated_returns_account_id(self, event_payload):
        event = event_payload(
            "account.updated",
            obj={"id": "acct_1", "details_submitted": True, "metadata": {"mentorId": "m1"}},
        )

        assert handle_account_updated(event).data == "acct_1"
