"""
Document store client.

Thin wrapper over the document database that holds mentor records.
Backends implement core.protocols.DocumentStore; the active backend is
selected by settings.DOCUMENT_STORE and built once per process.

Backends:
    - documents.backends.firestore.FirestoreDocumentStore (production)
    - documents.backends.locmem.LocMemDocumentStore (local preview, tests)

Usage:
    from documents import COLLECTIONS, get_document_store

    store = get_document_store()
    mentor = store.get_document(COLLECTIONS.MENTORS, mentor_id)
"""

from documents.collections import COLLECTIONS
from documents.exceptions import DocumentNotFoundError, DocumentStoreError
from documents.factory import get_document_store

__all__ = [
    "COLLECTIONS",
    "DocumentNotFoundError",
    "DocumentStoreError",
    "get_document_store",
]
