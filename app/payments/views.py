"""
DRF views for payments app.

This module provides API views for:
- Payment authorization (manual capture)
- Refunds and authorization cancellation
- Stripe Connect onboarding
- Mentor balances and payouts

Related files:
    - services/: Business logic
    - serializers.py: Request/response serializers
    - urls.py: URL routing
    - webhooks/views.py: Stripe webhook endpoint

Endpoints:
    POST /api/create-payment-intent - Authorize a session payment
    POST /api/create-refund - Refund or cancel a PaymentIntent
    POST /api/create-connect-account - Start mentor onboarding
    GET /api/mentor-balance/<mentorId> - Connected-account balance
    POST /api/mentor-payout/<mentorId> - Pay out available balance

Security:
    - Endpoints are unauthenticated; the front-end calls them cross-origin
    - CORS (including preflight) is answered by django-cors-headers
    - Processor error text is logged, never returned
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import BaseApplicationError
from core.helpers import first_error_message, get_request_origin
from mentors import get_mentor_repository
from payments.adapters import get_stripe_adapter
from payments.exceptions import StripeNotConfiguredError
from payments.serializers import (
    BalanceResponseSerializer,
    ConnectAccountResponseSerializer,
    CreateConnectAccountSerializer,
    CreatePaymentIntentSerializer,
    CreatePayoutSerializer,
    CreateRefundSerializer,
    ErrorResponseSerializer,
    PaymentIntentResponseSerializer,
    PayoutResponseSerializer,
    RefundResponseSerializer,
)
from payments.services import (
    AuthorizationService,
    ConnectService,
    MentorBalanceService,
    PayoutService,
    RefundService,
)

if TYPE_CHECKING:
    from typing import Any

    from core.services import ServiceResult

logger = logging.getLogger(__name__)

CONFIGURATION_ERROR_MESSAGE = "Payment service configuration error"

# Service error codes answered with something other than 400
ERROR_CODE_STATUSES = {
    "MENTOR_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "STRIPE_ACCOUNT_NOT_CONNECTED": status.HTTP_404_NOT_FOUND,
}


class PaymentAPIView(APIView):
    """
    Base view for the payment endpoints.

    Subclasses set failure_message, the only text a client sees when a
    collaborator (Stripe, the document store) fails.
    """

    authentication_classes: list = []
    permission_classes = [AllowAny]
    failure_message = "Request failed"

    def invalid_request(self, serializer) -> Response:
        message = first_error_message(serializer.errors)
        logger.warning(
            f"{self.__class__.__name__} rejected request: {message}",
            extra={"errors": serializer.errors},
        )
        return Response({"error": message}, status=status.HTTP_400_BAD_REQUEST)

    def service_failure(self, result: ServiceResult) -> Response:
        return Response(
            result.to_response(),
            status=ERROR_CODE_STATUSES.get(result.error_code, status.HTTP_400_BAD_REQUEST),
        )

    def collaborator_failure(
        self,
        error: BaseApplicationError,
        log_context: dict[str, Any],
    ) -> Response:
        """Log a collaborator error and answer with the generic message."""
        logger.error(
            f"{self.__class__.__name__} failed: {error}",
            extra={
                **log_context,
                "error_code": error.error_code,
                "retryable": getattr(error, "is_retryable", False),
            },
            exc_info=error,
        )
        message = (
            CONFIGURATION_ERROR_MESSAGE
            if isinstance(error, StripeNotConfiguredError)
            else self.failure_message
        )
        return Response({"error": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class CreatePaymentIntentView(PaymentAPIView):
    """
    Authorize a session payment.

    POST /api/create-payment-intent

    Request:
        - amount (required): Amount in the smallest currency unit, > 0
        - currency (optional): Defaults to PAYMENTS_DEFAULT_CURRENCY
        - description (optional): Stored in metadata
        - mentorStripeAccountId (optional): Stored in metadata

    Response:
        200 OK: {clientSecret, id, amount, currency, status}
        400 Bad Request: "Valid amount is required"
        500 Internal Server Error: "Failed to create payment intent"
    """

    failure_message = "Failed to create payment intent"

    @extend_schema(
        operation_id="create_payment_intent",
        summary="Create payment intent",
        description=(
            "Create a PaymentIntent with manual capture. The card is authorized "
            "on confirmation and the funds stay on hold until captured or canceled."
        ),
        request=CreatePaymentIntentSerializer,
        responses={
            200: PaymentIntentResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid amount"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Stripe failure"),
        },
        tags=["Payments"],
    )
    def post(self, request):
        serializer = CreatePaymentIntentSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_request(serializer)
        data = serializer.validated_data

        service = AuthorizationService(get_stripe_adapter())
        try:
            result = service.authorize(
                amount=data["amount"],
                currency=data.get("currency") or settings.PAYMENTS_DEFAULT_CURRENCY,
                description=data.get("description"),
                mentor_account_id=data.get("mentorStripeAccountId"),
            )
        except BaseApplicationError as e:
            return self.collaborator_failure(e, {"amount": data["amount"]})

        if not result.success:
            return self.service_failure(result)

        intent = result.data
        return Response(
            {
                "clientSecret": intent.client_secret,
                "id": intent.id,
                "amount": intent.amount,
                "currency": intent.currency,
                "status": intent.status,
            }
        )


class CreateRefundView(PaymentAPIView):
    """
    Refund a payment or release its authorization.

    POST /api/create-refund

    Request:
        - paymentIntentId (required): PaymentIntent to refund
        - reason (optional): Defaults to requested_by_customer
        - amount (optional): Partial refund amount (captured payments only)

    Response:
        200 OK: {id, status, canceled: true} when the hold was released
        200 OK: {id, payment_intent, amount, status, created} for a refund
        400 Bad Request: Missing id, or status not refundable
        500 Internal Server Error: "Failed to process refund"
    """

    failure_message = "Failed to process refund"

    @extend_schema(
        operation_id="create_refund",
        summary="Refund or cancel a payment",
        description=(
            "Cancels the PaymentIntent when it is still awaiting capture, refunds it "
            "when it has succeeded, and rejects every other status."
        ),
        request=CreateRefundSerializer,
        responses={
            200: OpenApiResponse(
                response=RefundResponseSerializer,
                description="Refund created, or {id, status, canceled} when the hold was released",
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Not refundable"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Stripe failure"),
        },
        tags=["Payments"],
    )
    def post(self, request):
        serializer = CreateRefundSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_request(serializer)
        data = serializer.validated_data

        service = RefundService(get_stripe_adapter())
        try:
            result = service.refund_or_cancel(
                data["paymentIntentId"],
                reason=data.get("reason"),
                amount=data.get("amount"),
            )
        except BaseApplicationError as e:
            return self.collaborator_failure(
                e, {"payment_intent_id": data["paymentIntentId"]}
            )

        if not result.success:
            return self.service_failure(result)
        return Response(result.data.to_response())


class CreateConnectAccountView(PaymentAPIView):
    """
    Start Stripe Connect onboarding for a mentor.

    POST /api/create-connect-account

    Request:
        - mentorId (required): Mentor document id
        - email (required): Mentor email
        - country (optional): Defaults to CONNECT_DEFAULT_COUNTRY

    Response:
        200 OK: {accountId, message} when the mentor is already connected
        201 Created: {accountId, status, accountLink}
        400 Bad Request: "Mentor ID and email are required"
        500 Internal Server Error: "Failed to create Connect account"
    """

    failure_message = "Failed to create Connect account"

    @extend_schema(
        operation_id="create_connect_account",
        summary="Create Connect account",
        description=(
            "Creates an Express account for the mentor, stores its id on the mentor "
            "record and returns an onboarding link. Mentors that already have an "
            "account get it back without a new one being created."
        ),
        request=CreateConnectAccountSerializer,
        responses={
            200: OpenApiResponse(
                response=ConnectAccountResponseSerializer,
                description="Mentor already connected",
            ),
            201: OpenApiResponse(
                response=ConnectAccountResponseSerializer,
                description="Account created",
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing fields"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Stripe failure"),
        },
        tags=["Connect"],
    )
    def post(self, request):
        serializer = CreateConnectAccountSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_request(serializer)
        data = serializer.validated_data
        mentor_id = data["mentorId"]

        service = ConnectService(
            get_stripe_adapter(),
            get_mentor_repository(),
            require_mentor_record=settings.CONNECT_REQUIRE_MENTOR_RECORD,
        )
        try:
            result = service.create_account(
                mentor_id=mentor_id,
                email=data["email"],
                country=data.get("country") or settings.CONNECT_DEFAULT_COUNTRY,
                onboarding_url=(
                    f"{get_request_origin(request)}{settings.CONNECT_ONBOARDING_PATH}"
                ),
            )
        except BaseApplicationError as e:
            return self.collaborator_failure(e, {"mentor_id": mentor_id})

        if not result.success:
            return self.service_failure(result)

        outcome = result.data
        return Response(
            outcome.to_response(),
            status=status.HTTP_200_OK if outcome.existing else status.HTTP_201_CREATED,
        )


class MentorBalanceView(PaymentAPIView):
    """
    Get a mentor's connected-account balance.

    GET /api/mentor-balance/<mentorId>

    Response:
        200 OK: {available, pending, instant_available}
        404 Not Found: Mentor missing or not connected
        500 Internal Server Error: "Failed to retrieve mentor balance"
    """

    failure_message = "Failed to retrieve mentor balance"

    @extend_schema(
        operation_id="get_mentor_balance",
        summary="Get mentor balance",
        responses={
            200: BalanceResponseSerializer,
            404: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Mentor not found or not connected",
            ),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Stripe failure"),
        },
        tags=["Connect"],
    )
    def get(self, request, mentor_id):
        service = MentorBalanceService(get_stripe_adapter(), get_mentor_repository())
        try:
            result = service.get_balance(mentor_id)
        except BaseApplicationError as e:
            return self.collaborator_failure(e, {"mentor_id": mentor_id})

        if not result.success:
            return self.service_failure(result)

        balance = result.data
        return Response(
            {
                "available": balance.available,
                "pending": balance.pending,
                "instant_available": balance.instant_available,
            }
        )


class MentorPayoutView(PaymentAPIView):
    """
    Pay out part of a mentor's available balance.

    POST /api/mentor-payout/<mentorId>

    Request:
        - amount (required): Amount in the smallest currency unit, > 0
        - currency (optional): Defaults to PAYMENTS_DEFAULT_CURRENCY
        - description (optional): Payout description

    Response:
        201 Created: {payoutId, amount, currency, status, arrivalDate}
        400 Bad Request: Invalid amount, or {"error": "Insufficient balance", "available": n}
        404 Not Found: Mentor missing or not connected
        500 Internal Server Error: "Failed to create payout"
    """

    failure_message = "Failed to create payout"

    @extend_schema(
        operation_id="create_mentor_payout",
        summary="Create mentor payout",
        request=CreatePayoutSerializer,
        responses={
            201: PayoutResponseSerializer,
            400: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Invalid amount or insufficient balance",
            ),
            404: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Mentor not found or not connected",
            ),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Stripe failure"),
        },
        tags=["Connect"],
    )
    def post(self, request, mentor_id):
        serializer = CreatePayoutSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_request(serializer)
        data = serializer.validated_data

        service = PayoutService(
            get_stripe_adapter(),
            get_mentor_repository(),
            statement_descriptor=settings.PAYOUT_STATEMENT_DESCRIPTOR,
        )
        try:
            result = service.create_payout(
                mentor_id,
                amount=data["amount"],
                currency=data.get("currency") or settings.PAYMENTS_DEFAULT_CURRENCY,
                description=data.get("description"),
            )
        except BaseApplicationError as e:
            return self.collaborator_failure(
                e, {"mentor_id": mentor_id, "amount": data["amount"]}
            )

        if not result.success:
            return self.service_failure(result)
        return Response(result.data.to_response(), status=status.HTTP_201_CREATED)
