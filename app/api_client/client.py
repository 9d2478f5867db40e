"""
HTTP client for the payment endpoints.

Every method posts (or gets) JSON and returns the decoded body. Non-2xx
responses raise ApiClientError carrying the status code and whatever body
the server sent, so callers can show the server's "error" message.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING
from urllib.parse import quote

import requests

from core.exceptions import ExternalServiceError

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


def get_api_url(endpoint: str, base_url: str = "") -> str:
    """
    Build the URL of an API endpoint.

    Without a base URL the path stays relative, as when the front-end and
    the API share an origin.

    Example:
        get_api_url("/create-payment-intent")
        # "/api/create-payment-intent"
        get_api_url("/create-refund", "https://api.example.com/")
        # "https://api.example.com/api/create-refund"
    """
    return f"{base_url.rstrip('/')}/api{endpoint}"


class ApiClientError(ExternalServiceError):
    """
    Raised when the API answers with a non-2xx status or can't be reached.

    Attributes:
        status_code: HTTP status, None when no response was received
        payload: Decoded response body (or None)
    """

    default_error_code = "API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: Any = None,
    ):
        super().__init__(
            message,
            details={"status_code": status_code} if status_code else None,
        )
        self.status_code = status_code
        self.payload = payload

    @property
    def server_message(self) -> str | None:
        """The "error" text from the response body, when there is one."""
        if isinstance(self.payload, dict):
            return self.payload.get("error")
        return None


class ApiClient:
    """
    requests-based client for the mentor payments API.

    Args:
        base_url: Scheme and host of the backend ("" for relative URLs)
        session: requests.Session to reuse; one is created if omitted
        timeout: Per-request timeout in seconds

    Usage:
        client = ApiClient("https://api.example.com")
        balance = client.get_mentor_balance("m1")
    """

    def __init__(
        self,
        base_url: str = "",
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = timeout

    # =========================================================================
    # Payments
    # =========================================================================

    def create_payment_intent(
        self,
        amount: int,
        currency: str = "usd",
        description: str | None = None,
        mentor_stripe_account_id: str | None = None,
    ) -> dict[str, Any]:
        """POST /create-payment-intent -> {clientSecret, id, amount, currency, status}"""
        body: dict[str, Any] = {"amount": amount, "currency": currency}
        if description:
            body["description"] = description
        if mentor_stripe_account_id:
            body["mentorStripeAccountId"] = mentor_stripe_account_id
        return self._request("POST", "/create-payment-intent", json=body)

    def create_refund(
        self,
        payment_intent_id: str,
        reason: str | None = None,
        amount: int | None = None,
    ) -> dict[str, Any]:
        """POST /create-refund -> refund body, or {id, status, canceled} for a release."""
        body: dict[str, Any] = {"paymentIntentId": payment_intent_id}
        if reason:
            body["reason"] = reason
        if amount is not None:
            body["amount"] = amount
        return self._request("POST", "/create-refund", json=body)

    # =========================================================================
    # Connect
    # =========================================================================

    def create_connect_account(
        self,
        mentor_id: str,
        email: str,
        country: str | None = None,
    ) -> dict[str, Any]:
        body = {"mentorId": mentor_id, "email": email}
        if country:
            body["country"] = country
        return self._request("POST", "/create-connect-account", json=body)

    def get_mentor_balance(self, mentor_id: str) -> dict[str, Any]:
        return self._request("GET", f"/mentor-balance/{quote(mentor_id, safe='')}")

    def create_mentor_payout(
        self,
        mentor_id: str,
        amount: int,
        currency: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"amount": amount}
        if currency:
            body["currency"] = currency
        if description:
            body["description"] = description
        return self._request(
            "POST", f"/mentor-payout/{quote(mentor_id, safe='')}", json=body
        )

    # =========================================================================
    # Webhooks
    # =========================================================================

    def send_webhook_event(
        self,
        payload: bytes | str,
        signature: str | None = None,
    ) -> dict[str, Any]:
        """
        Deliver a raw webhook body, as Stripe (or the Stripe CLI) would.

        The body is sent unmodified so the signature still matches.
        """
        headers = {"Content-Type": "application/json"}
        if signature:
            headers["Stripe-Signature"] = signature
        return self._request("POST", "/stripe-webhook", data=payload, headers=headers)

    # =========================================================================
    # Transport
    # =========================================================================

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> dict[str, Any]:
        url = get_api_url(endpoint, self.base_url)
        log_context = {"method": method, "url": url}
        start_time = time.time()

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning(
                f"API request failed: {type(e).__name__}",
                extra={**log_context, "duration_ms": (time.time() - start_time) * 1000},
            )
            raise ApiClientError(f"API error: {e}") from e

        duration_ms = (time.time() - start_time) * 1000
        if not response.ok:
            logger.warning(
                "API request rejected",
                extra={
                    **log_context,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            raise ApiClientError(
                f"API error: {response.reason}",
                status_code=response.status_code,
                payload=self._decode(response),
            )

        logger.debug(
            "API request completed",
            extra={**log_context, "status_code": response.status_code, "duration_ms": duration_ms},
        )
        return self._decode(response)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None
