"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /docs/                         - ReDoc API documentation
    /health/                       - Health check endpoint (load balancers, api_client)
    /schema/                       - OpenAPI schema (YAML)
    /api/                          - Payment endpoints (no trailing slashes)
        create-payment-intent      - Authorize a session payment (POST)
        create-refund              - Refund or cancel a payment (POST)
        create-connect-account     - Start mentor Connect onboarding (POST)
        mentor-balance/{mentorId}  - Mentor connected-account balance (GET)
        mentor-payout/{mentorId}   - Pay out a mentor's balance (POST)
        stripe-webhook             - Stripe webhook endpoint (POST)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("docs/", SpectacularRedocView.as_view(url_name="schema"), name="docs"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Health check (containers, load balancers, api_client probe)
    path("health/", health_check, name="health_check"),
    # Payments API
    path("api/", include("payments.urls")),
]
