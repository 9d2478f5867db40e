"""
URL configuration for the payments app.

Routes:
    - POST /create-payment-intent - Authorize a session payment
    - POST /create-refund - Refund or cancel a PaymentIntent
    - POST /create-connect-account - Start mentor Connect onboarding
    - GET /mentor-balance/<mentor_id> - Connected-account balance
    - POST /mentor-payout/<mentor_id> - Pay out available balance
    - POST /stripe-webhook - Stripe webhook endpoint

All routes are prefixed with /api/ when included in the main URLconf.
Paths carry no trailing slash; the front-end calls them exactly as listed.

Usage:
    # In config/urls.py
    urlpatterns = [
        path("api/", include("payments.urls")),
    ]
"""

from django.urls import path

from payments.views import (
    CreateConnectAccountView,
    CreatePaymentIntentView,
    CreateRefundView,
    MentorBalanceView,
    MentorPayoutView,
)
from payments.webhooks.views import stripe_webhook

app_name = "payments"

urlpatterns = [
    # Payments
    path(
        "create-payment-intent",
        CreatePaymentIntentView.as_view(),
        name="create_payment_intent",
    ),
    path("create-refund", CreateRefundView.as_view(), name="create_refund"),
    # Connect
    path(
        "create-connect-account",
        CreateConnectAccountView.as_view(),
        name="create_connect_account",
    ),
    path(
        "mentor-balance/<str:mentor_id>",
        MentorBalanceView.as_view(),
        name="mentor_balance",
    ),
    path(
        "mentor-payout/<str:mentor_id>",
        MentorPayoutView.as_view(),
        name="mentor_payout",
    ),
    # Webhook endpoints
    path("stripe-webhook", stripe_webhook, name="stripe_webhook"),
]
