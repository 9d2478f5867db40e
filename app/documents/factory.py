"""
Factory function for document store backend selection.

Builds the backend named in settings.DOCUMENT_STORE once per process:

    DOCUMENT_STORE = {
        "BACKEND": "documents.backends.firestore.FirestoreDocumentStore",
        "OPTIONS": {"project": "my-project", "database": "(default)"},
    }

The backend module is imported lazily so the Firestore client library is
only loaded when that backend is configured.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

if TYPE_CHECKING:
    from core.protocols import DocumentStore


logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "documents.backends.firestore.FirestoreDocumentStore"


@lru_cache(maxsize=None)
def get_document_store() -> "DocumentStore":
    """
    Get the process-wide document store.

    Returns:
        DocumentStore implementation configured in settings

    Raises:
        ImproperlyConfigured: The backend path can't be imported

    Usage:
        store = get_document_store()
        store.get_document("mentors", mentor_id)

    Note:
        Call get_document_store.cache_clear() after changing settings
        (tests do this between cases).
    """
    config = getattr(settings, "DOCUMENT_STORE", {}) or {}
    backend_path = config.get("BACKEND", DEFAULT_BACKEND)
    options = {
        key: value
        for key, value in (config.get("OPTIONS") or {}).items()
        if value not in (None, "")
    }

    try:
        backend_class = import_string(backend_path)
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Could not import document store backend '{backend_path}': {e}"
        ) from e

    logger.info(
        "Initializing document store",
        extra={"backend": backend_path, "options": sorted(options)},
    )
    return backend_class(**options)
