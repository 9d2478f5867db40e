"""
Stripe configuration.

Settings are read once into an immutable StripeConfig that is handed to
the adapter. Nothing here writes to stripe.api_key; each SDK call carries
its own key.

Configuration (via settings):
- STRIPE_SECRET_KEY: API secret key (no default)
- STRIPE_PUBLISHABLE_KEY: Publishable key, exposed to the front-end only
- STRIPE_WEBHOOK_SECRET: Webhook signing secret
- STRIPE_API_VERSION: Pinned API version (empty uses the account default)
- STRIPE_API_TIMEOUT_SECONDS: HTTP timeout per call (default: 10)
- STRIPE_WEBHOOK_ALLOW_UNVERIFIED: Accept unsigned webhooks (default: True)
"""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class StripeConfig:
    """
    Immutable Stripe settings.

    Attributes:
        secret_key: Stripe API secret key (sk_...)
        publishable_key: Stripe publishable key (pk_...)
        webhook_secret: Webhook endpoint signing secret (whsec_...)
        api_version: Stripe API version header, None for account default
        timeout_seconds: Per-request HTTP timeout
        allow_unverified_webhooks: Parse unsigned webhook bodies as-is
    """

    secret_key: str = ""
    publishable_key: str = ""
    webhook_secret: str = ""
    api_version: str | None = None
    timeout_seconds: float = 10
    allow_unverified_webhooks: bool = True

    @classmethod
    def from_settings(cls) -> StripeConfig:
        return cls(
            secret_key=getattr(settings, "STRIPE_SECRET_KEY", "") or "",
            publishable_key=getattr(settings, "STRIPE_PUBLISHABLE_KEY", "") or "",
            webhook_secret=getattr(settings, "STRIPE_WEBHOOK_SECRET", "") or "",
            api_version=getattr(settings, "STRIPE_API_VERSION", "") or None,
            timeout_seconds=getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10),
            allow_unverified_webhooks=getattr(
                settings, "STRIPE_WEBHOOK_ALLOW_UNVERIFIED", True
            ),
        )

    @property
    def is_configured(self) -> bool:
        """Whether API calls can be made."""
        return bool(self.secret_key)

    @property
    def can_verify_webhooks(self) -> bool:
        return bool(self.webhook_secret)

    def __repr__(self) -> str:
        # Keys never appear in logs or tracebacks
        return (
            f"StripeConfig(configured={self.is_configured}, "
            f"webhook_secret_set={self.can_verify_webhooks}, "
            f"api_version={self.api_version!r})"
        )
