"""
Document store exceptions.

Exception Hierarchy:
    ExternalServiceError (core)
    └── DocumentStoreError - Backend call failed (network, permissions, ...)
        └── DocumentNotFoundError - Update targeted a missing document
"""

from __future__ import annotations

from core.exceptions import ExternalServiceError


class DocumentStoreError(ExternalServiceError):
    """
    Raised when the document database rejects or fails a call.

    The original backend exception is chained (raise ... from e) and
    logged; only a generic message reaches API clients.
    """

    default_error_code: str = "DOCUMENT_STORE_ERROR"


class DocumentNotFoundError(DocumentStoreError):
    """
    Raised when updating a document that doesn't exist.

    Reads never raise this; get_document returns None instead.
    """

    default_error_code: str = "DOCUMENT_NOT_FOUND"
    http_status: int = 404
