"""
Factory function for API client selection.

Picks the real ApiClient when the backend answers its health check and
falls back to MockApiClient otherwise, so previews keep working without
a backend.
"""

from __future__ import annotations

import logging

import requests
from django.conf import settings

from api_client.client import ApiClient
from api_client.mock import MockApiClient

logger = logging.getLogger(__name__)

HEALTH_CHECK_PATH = "/health/"
HEALTH_CHECK_TIMEOUT_SECONDS = 3


def _backend_reachable(base_url: str, session: requests.Session) -> bool:
    """Probe the health endpoint; any 2xx counts as reachable."""
    url = f"{base_url.rstrip('/')}{HEALTH_CHECK_PATH}"
    try:
        response = session.get(url, timeout=HEALTH_CHECK_TIMEOUT_SECONDS)
    except requests.RequestException:
        # Relative URLs (no base_url) raise MissingSchema here
        logger.info("API backend unreachable", extra={"url": url}, exc_info=True)
        return False
    return response.ok


def get_api_client(
    base_url: str | None = None,
    use_mock: bool | None = None,
    session: requests.Session | None = None,
) -> ApiClient | MockApiClient:
    """
    Get an API client.

    Args:
        base_url: Backend origin (defaults to settings.API_BASE_URL)
        use_mock: Force the mock (True) or real (False) client;
            defaults to settings.API_CLIENT_USE_MOCKS, and when that is
            unset too the backend is probed
        session: requests.Session shared by the probe and the client

    Returns:
        ApiClient or MockApiClient (same interface)

    Usage:
        client = get_api_client()
        client.get_mentor_balance("m1")
    """
    if base_url is None:
        base_url = getattr(settings, "API_BASE_URL", "") or ""
    if use_mock is None:
        use_mock = getattr(settings, "API_CLIENT_USE_MOCKS", None)

    session = session or requests.Session()

    if use_mock is None:
        use_mock = not _backend_reachable(base_url, session)
        if use_mock:
            logger.warning("Using mock API client; responses are fictitious")

    if use_mock:
        return MockApiClient(
            publishable_key=getattr(settings, "STRIPE_PUBLISHABLE_KEY", "") or "",
        )
    return ApiClient(base_url, session=session)
