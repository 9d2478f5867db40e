"""
DRF serializers for payments app.

This module provides serializers for:
- Request bodies of the payment endpoints (camelCase, as the front-end sends)
- Response bodies, used for the OpenAPI schema

Validation messages are the ones the front-end displays, so every field
error of a required input carries the endpoint's message.

Related files:
    - views.py: Payment API views
    - services/: Business logic called by the views

Usage:
    serializer = CreatePaymentIntentSerializer(data=request.data)
    if not serializer.is_valid():
        message = first_error_message(serializer.errors)
"""

from __future__ import annotations

from rest_framework import serializers

AMOUNT_ERRORS = {
    "required": "Valid amount is required",
    "null": "Valid amount is required",
    "invalid": "Valid amount is required",
    "min_value": "Valid amount is required",
    "max_string_length": "Valid amount is required",
}


# =============================================================================
# Request Serializers
# =============================================================================


class CreatePaymentIntentSerializer(serializers.Serializer):
    """
    Request body for POST /api/create-payment-intent.

    Fields:
        amount: Amount in the smallest currency unit (required, > 0)
        currency: ISO 4217 code (defaults to PAYMENTS_DEFAULT_CURRENCY)
        description: Free text stored in intent metadata
        mentorStripeAccountId: Mentor's connected account, metadata only
    """

    amount = serializers.IntegerField(min_value=1, error_messages=AMOUNT_ERRORS)
    currency = serializers.CharField(required=False, allow_blank=True, max_length=3)
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=500
    )
    mentorStripeAccountId = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )


class CreateRefundSerializer(serializers.Serializer):
    """
    Request body for POST /api/create-refund.

    Fields:
        paymentIntentId: PaymentIntent to refund or cancel (required)
        reason: Refund or cancellation reason (default requested_by_customer)
        amount: Partial refund amount; ignored when the intent is canceled
    """

    paymentIntentId = serializers.CharField(
        error_messages={
            "required": "Payment intent ID is required",
            "blank": "Payment intent ID is required",
            "null": "Payment intent ID is required",
        },
    )
    reason = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=64
    )
    amount = serializers.IntegerField(
        required=False,
        allow_null=True,
        min_value=1,
        error_messages={
            "invalid": "Refund amount must be a positive integer",
            "min_value": "Refund amount must be a positive integer",
        },
    )


CONNECT_ERRORS = {
    "required": "Mentor ID and email are required",
    "blank": "Mentor ID and email are required",
    "null": "Mentor ID and email are required",
}


class CreateConnectAccountSerializer(serializers.Serializer):
    """
    Request body for POST /api/create-connect-account.

    Fields:
        mentorId: Mentor document id (required)
        email: Mentor email (required)
        country: ISO 3166-1 alpha-2 (defaults to CONNECT_DEFAULT_COUNTRY)
    """

    mentorId = serializers.CharField(max_length=128, error_messages=CONNECT_ERRORS)
    email = serializers.EmailField(
        error_messages={**CONNECT_ERRORS, "invalid": "A valid email is required"}
    )
    country = serializers.CharField(
        required=False, allow_blank=True, min_length=2, max_length=2
    )


class CreatePayoutSerializer(serializers.Serializer):
    """
    Request body for POST /api/mentor-payout/<mentorId>.

    Fields:
        amount: Amount to pay out (required, > 0)
        currency: ISO 4217 code (defaults to PAYMENTS_DEFAULT_CURRENCY)
        description: Internal description of the payout
    """

    amount = serializers.IntegerField(min_value=1, error_messages=AMOUNT_ERRORS)
    currency = serializers.CharField(required=False, allow_blank=True, max_length=3)
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )


# =============================================================================
# Response Serializers (schema only)
# =============================================================================


class PaymentIntentResponseSerializer(serializers.Serializer):
    clientSecret = serializers.CharField()
    id = serializers.CharField()
    amount = serializers.IntegerField()
    currency = serializers.CharField()
    status = serializers.CharField()


class RefundResponseSerializer(serializers.Serializer):
    id = serializers.CharField()
    payment_intent = serializers.CharField()
    amount = serializers.IntegerField()
    status = serializers.CharField()
    created = serializers.IntegerField()


class ConnectAccountResponseSerializer(serializers.Serializer):
    accountId = serializers.CharField()
    status = serializers.ChoiceField(choices=["complete", "pending"], required=False)
    accountLink = serializers.URLField(required=False)
    message = serializers.CharField(required=False)


class BalanceEntrySerializer(serializers.Serializer):
    amount = serializers.IntegerField()
    currency = serializers.CharField()
    source_types = serializers.DictField(required=False)


class BalanceResponseSerializer(serializers.Serializer):
    available = BalanceEntrySerializer(many=True)
    pending = BalanceEntrySerializer(many=True)
    instant_available = BalanceEntrySerializer(many=True)


class PayoutResponseSerializer(serializers.Serializer):
    payoutId = serializers.CharField()
    amount = serializers.IntegerField()
    currency = serializers.CharField()
    status = serializers.CharField()
    arrivalDate = serializers.IntegerField(allow_null=True)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
