"""
Offline stand-in for ApiClient.

Each call sleeps for a fixed delay, then returns made-up identifiers and
amounts in exactly the shape the real endpoint returns. Nothing is sent
anywhere; the data is random and must never be treated as real.
"""

from __future__ import annotations

import logging
import random
import string
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.0

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _random_token(length: int = 11) -> str:
    return "".join(random.choices(_ID_ALPHABET, k=length))


def _balance_entry(amount: int, currency: str = "usd") -> dict[str, Any]:
    return {"amount": amount, "currency": currency, "source_types": {"card": amount}}


class MockApiClient:
    """
    ApiClient look-alike returning randomized data.

    Args:
        delay: Seconds to wait before each response
        publishable_key: Used only to make fake ids look like the account's

    Usage:
        client = MockApiClient(delay=0)
        client.create_payment_intent(2500, "usd", "1hr session")
        # {"clientSecret": "pi_..._secret_pk_test_...", "id": "pi_...", ...}
    """

    def __init__(self, delay: float = DEFAULT_DELAY_SECONDS, publishable_key: str = ""):
        self.delay = delay
        self.publishable_key = publishable_key

    def _simulate_latency(self, operation: str) -> None:
        logger.debug(f"Mock API call: {operation}", extra={"delay": self.delay})
        if self.delay:
            time.sleep(self.delay)

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
        self._simulate_latency("create_payment_intent")
        prefix = self.publishable_key[:8] if self.publishable_key else "pk_test_"
        payment_intent_id = f"pi_{_random_token()}"
        return {
            "clientSecret": f"{payment_intent_id}_secret_{prefix}{_random_token()}",
            "id": payment_intent_id,
            "amount": amount,
            "currency": currency,
            "status": "requires_payment_method",
        }

    def create_refund(
        self,
        payment_intent_id: str,
        reason: str | None = None,
        amount: int | None = None,
    ) -> dict[str, Any]:
        self._simulate_latency("create_refund")
        return {
            "id": f"re_{_random_token()}",
            "payment_intent": payment_intent_id,
            "amount": amount or 0,
            "status": "succeeded",
            "created": int(time.time()),
        }

    # =========================================================================
    # Connect
    # =========================================================================

    def create_connect_account(
        self,
        mentor_id: str,
        email: str,
        country: str | None = None,
    ) -> dict[str, Any]:
        self._simulate_latency("create_connect_account")
        prefix = self.publishable_key[3:11] if self.publishable_key else "test_"
        return {
            "accountId": f"acct_{prefix}{_random_token()}",
            "status": "pending",
            "accountLink": f"https://connect.stripe.com/setup/mock/{_random_token()}",
        }

    def get_mentor_balance(self, mentor_id: str) -> dict[str, Any]:
        self._simulate_latency("get_mentor_balance")
        return {
            "available": [_balance_entry(random.randint(5000, 14999))],
            "pending": [_balance_entry(random.randint(1000, 5999))],
            "instant_available": [_balance_entry(0)],
        }

    def create_mentor_payout(
        self,
        mentor_id: str,
        amount: int,
        currency: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        self._simulate_latency("create_mentor_payout")
        return {
            "payoutId": f"po_{_random_token()}",
            "amount": amount,
            "currency": currency or "usd",
            "status": "pending",
            "arrivalDate": int(time.time()) + 2 * 24 * 60 * 60,
        }

    # =========================================================================
    # Webhooks
    # =========================================================================

    def send_webhook_event(
        self,
        payload: bytes | str,
        signature: str | None = None,
    ) -> dict[str, Any]:
        self._simulate_latency("send_webhook_event")
        return {"received": True}
