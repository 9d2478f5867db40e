"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks.
"""

import logging

from django.http import JsonResponse

from core.exceptions import BaseApplicationError
from documents import get_document_store
from payments.adapters import get_stripe_adapter

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    This endpoint is used by:
    - Container health checks
    - Load balancers
    - The front-end's API client, to decide between the real and mock API

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - document_store: "connected" or "disconnected"
        - payments: "configured" or "unconfigured"

    HTTP Status Codes:
        200: All systems operational
        503: Document store unreachable

    Example Response:
        {
            "status": "healthy",
            "document_store": "connected",
            "payments": "configured"
        }
    """
    health_status = {
        "status": "healthy",
        "document_store": "unknown",
        "payments": "unknown",
    }
    is_healthy = True

    # Check document store connectivity
    try:
        connected = get_document_store().ping()
    except BaseApplicationError:
        logger.warning("Document store health check failed", exc_info=True)
        connected = False
    health_status["document_store"] = "connected" if connected else "disconnected"
    if not connected:
        health_status["status"] = "unhealthy"
        is_healthy = False

    # Missing Stripe keys only affect the payment endpoints (graceful degradation)
    configured = get_stripe_adapter().config.is_configured
    health_status["payments"] = "configured" if configured else "unconfigured"

    # Return appropriate HTTP status
    status_code = 200 if is_healthy else 503

    return JsonResponse(health_status, status=status_code)
