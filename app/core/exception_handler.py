"""
DRF exception handler rendering every API error in one shape.

Configured via REST_FRAMEWORK["EXCEPTION_HANDLER"]. Produces bodies of the
form {"error": "<message>", ...} for:
- DRF APIExceptions (malformed JSON, method not allowed, ...)
- BaseApplicationError subclasses raised out of a view

Anything else is left to DRF (and ultimately Django's 500 handling) after
being logged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)


def _flatten_detail(detail: Any) -> str:
    """Pick a single human-readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _flatten_detail(value)
        return ""
    if isinstance(detail, (list, tuple)):
        return _flatten_detail(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """
    Convert exceptions raised in API views into JSON error responses.

    Args:
        exc: The exception raised by the view
        context: DRF handler context (contains the view and request)

    Returns:
        Response with an "error" key, or None to let Django handle it
    """
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if isinstance(exc, BaseApplicationError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{view_name} failed: {exc}",
            extra={"error_code": exc.error_code, "view": view_name},
        )
        body = exc.to_dict()
        if exc.http_status >= 500:
            # Collaborator details stay in the logs
            body.pop("details", None)
        return Response(body, status=exc.http_status)

    response = exception_handler(exc, context)
    if response is None:
        logger.error(
            f"Unhandled exception in {view_name}: {type(exc).__name__}",
            exc_info=exc,
        )
        return None

    logger.warning(
        f"{view_name} rejected request: {exc}",
        extra={"status_code": response.status_code, "view": view_name},
    )
    response.data = {"error": _flatten_detail(response.data)}
    return response
