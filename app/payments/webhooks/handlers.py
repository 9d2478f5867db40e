"""
Webhook event handlers for Stripe events.

This module provides a handler registry and implementations for
processing the Stripe webhook events this service cares about.

Handlers only record what happened in the logs. Payment and session
state lives in the front-end's documents and is not updated here.

Usage:
    from payments.webhooks.handlers import dispatch_webhook, register_handler

    # Register a custom handler
    @register_handler(WebhookEventType.ACCOUNT_UPDATED)
    def handle_account_updated(event: dict) -> ServiceResult:
        ...

    # Dispatch an event to its handler
    result = dispatch_webhook(event)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from core.services import ServiceResult

from payments.webhooks.types import WebhookEventType

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)

WebhookHandler = Callable[[dict], ServiceResult]


# =============================================================================
# Handler Registry
# =============================================================================


# Maps event types to handler functions
WEBHOOK_HANDLERS: dict[WebhookEventType, WebhookHandler] = {}


def register_handler(event_type: WebhookEventType) -> Callable:
    """
    Decorator to register a webhook event handler.

    Usage:
        @register_handler(WebhookEventType.PAYMENT_INTENT_SUCCEEDED)
        def handle_payment_succeeded(event: dict) -> ServiceResult:
            ...

    Args:
        event_type: The event type handled by the decorated function

    Returns:
        Decorator function that registers the handler
    """

    def decorator(func: WebhookHandler) -> WebhookHandler:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type.value}")
        return func

    return decorator


def dispatch_webhook(event: dict[str, Any]) -> ServiceResult:
    """
    Dispatch a webhook event to the appropriate handler.

    Unknown event types go to the UNHANDLED handler, which acknowledges
    them so Stripe doesn't keep retrying.

    Args:
        event: Parsed Stripe event (id, type, data.object, ...)

    Returns:
        ServiceResult from the handler
    """
    event_type = WebhookEventType.resolve(event.get("type"))
    handler = WEBHOOK_HANDLERS[event_type]

    logger.info(
        f"Dispatching {event.get('type')} to handler",
        extra={"stripe_event_id": event.get("id"), "event_type": event_type.value},
    )

    return handler(event)


def _event_object(event: dict[str, Any]) -> dict[str, Any]:
    return (event.get("data") or {}).get("object") or {}


# =============================================================================
# Payment Intent Handlers
# =============================================================================


@register_handler(WebhookEventType.PAYMENT_INTENT_SUCCEEDED)
def handle_payment_intent_succeeded(event: dict[str, Any]) -> ServiceResult:
    """Payment captured; funds have moved."""
    intent = _event_object(event)
    logger.info(
        f"PaymentIntent {intent.get('id')} succeeded",
        extra={
            "stripe_event_id": event.get("id"),
            "payment_intent_id": intent.get("id"),
            "amount": intent.get("amount"),
            "currency": intent.get("currency"),
        },
    )
    return ServiceResult.success(intent.get("id"))


@register_handler(WebhookEventType.PAYMENT_INTENT_PAYMENT_FAILED)
def handle_payment_intent_payment_failed(event: dict[str, Any]) -> ServiceResult:
    """Authorization or capture attempt failed."""
    intent = _event_object(event)
    last_error = intent.get("last_payment_error") or {}
    logger.warning(
        f"PaymentIntent {intent.get('id')} payment failed",
        extra={
            "stripe_event_id": event.get("id"),
            "payment_intent_id": intent.get("id"),
            "failure_code": last_error.get("code"),
            "failure_message": last_error.get("message"),
        },
    )
    return ServiceResult.success(intent.get("id"))


@register_handler(WebhookEventType.PAYMENT_INTENT_CANCELED)
def handle_payment_intent_canceled(event: dict[str, Any]) -> ServiceResult:
    intent = _event_object(event)
    logger.info(
        f"PaymentIntent {intent.get('id')} canceled",
        extra={
            "stripe_event_id": event.get("id"),
            "payment_intent_id": intent.get("id"),
            "cancellation_reason": intent.get("cancellation_reason"),
        },
    )
    return ServiceResult.success(intent.get("id"))


# =============================================================================
# Connect Handlers
# =============================================================================


@register_handler(WebhookEventType.ACCOUNT_UPDATED)
def handle_account_updated(event: dict[str, Any]) -> ServiceResult:
    """Connected account changed (onboarding progress, capabilities)."""
    account = _event_object(event)
    logger.info(
        f"Connected account {account.get('id')} updated",
        extra={
            "stripe_event_id": event.get("id"),
            "account_id": account.get("id"),
            "mentor_id": (account.get("metadata") or {}).get("mentorId"),
            "details_submitted": account.get("details_submitted"),
            "charges_enabled": account.get("charges_enabled"),
            "payouts_enabled": account.get("payouts_enabled"),
        },
    )
    return ServiceResult.success(account.get("id"))


@register_handler(WebhookEventType.UNHANDLED)
def handle_unhandled(event: dict[str, Any]) -> ServiceResult:
    logger.info(
        f"Unhandled event type: {event.get('type')}",
        extra={"stripe_event_id": event.get("id")},
    )
    return ServiceResult.success(None)
