"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Timestamps in the document store's format (epoch milliseconds)
- Request origin extraction (scheme + host)
- Serializer error flattening

Usage:
    from core.helpers import epoch_millis, first_error_message, get_request_origin

    patch = {"updatedAt": epoch_millis()}
    origin = get_request_origin(request)  # "https://app.example.com"
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any

    from django.http import HttpRequest


def epoch_millis() -> int:
    """
    Current time as integer milliseconds since the epoch.

    Matches the timestamp format the front-end writes into documents.
    """
    return int(time.time() * 1000)


def get_request_origin(request: HttpRequest) -> str:
    """
    Build the origin (scheme://host[:port]) the request was made against.

    Honours SECURE_PROXY_SSL_HEADER and USE_X_FORWARDED_HOST through
    Django's own request helpers.

    Args:
        request: Django HttpRequest (or DRF Request wrapping one)

    Returns:
        Origin string without a trailing slash

    Example:
        origin = get_request_origin(request)
        return_url = f"{origin}/dashboard"
    """
    return f"{request.scheme}://{request.get_host()}"


def first_error_message(errors: Any, default: str = "Invalid request") -> str:
    """
    Pick the first human-readable message out of serializer errors.

    Args:
        errors: serializer.errors (dict of lists, possibly nested)
        default: Message used when nothing usable is found

    Returns:
        The first error string

    Example:
        if not serializer.is_valid():
            message = first_error_message(serializer.errors)
    """
    if isinstance(errors, dict):
        for value in errors.values():
            return first_error_message(value, default)
    elif isinstance(errors, (list, tuple)):
        if errors:
            return first_error_message(errors[0], default)
    elif errors:
        return str(errors)
    return default
