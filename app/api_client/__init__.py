"""
Client for the mentor payments API.

Used by front-end tooling and scripts to call the payment endpoints. Two
interchangeable implementations share one interface:

- ApiClient: HTTP client over requests, talking to /api/... on the backend
- MockApiClient: Offline stand-in returning randomized data in the same
  response shapes, for static previews without a backend

Usage:
    from api_client import get_api_client

    client = get_api_client()
    intent = client.create_payment_intent(2500, "usd", "1hr session")
    secret = intent["clientSecret"]
"""

from api_client.client import ApiClient, ApiClientError, get_api_url
from api_client.factory import get_api_client
from api_client.mock import MockApiClient

__all__ = [
    "ApiClient",
    "ApiClientError",
    "MockApiClient",
    "get_api_client",
    "get_api_url",
]
