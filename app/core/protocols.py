"""
Protocol definitions for generic infrastructure services.

This module defines Protocol classes that specify interfaces
for infrastructure collaborators like the document store.

Protocols define contracts that services must fulfill, enabling:
- Duck typing with static type checking
- Dependency inversion (depend on abstractions, not concretions)
- Easy substitution in tests (the locmem backend)

Available Protocols:
    DocumentStore: Document database operations interface

Usage:
    from core.protocols import DocumentStore

    def load_mentor(store: DocumentStore, mentor_id: str):
        return store.get_document("mentors", mentor_id)

    class FirestoreDocumentStore:
        def get_document(self, collection, document_id): ...
        def update_document(self, collection, document_id, patch): ...
        def ping(self): ...

    # FirestoreDocumentStore is a valid DocumentStore
    # even without explicit inheritance (duck typing)
    store: DocumentStore = FirestoreDocumentStore(project="demo")

Note:
    - Protocols are primarily for type checking
    - @runtime_checkable allows isinstance() checks
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any


@runtime_checkable
class DocumentStore(Protocol):
    """
    Protocol for document database backends.

    Documents are addressed by a logical collection name and a
    document id. Returned documents are plain dicts that always
    carry their id under the "id" key.

    Example:
        store = get_document_store()
        mentor = store.get_document("mentors", "m1")
        if mentor is not None:
            store.update_document("mentors", "m1", {"stripeAccountId": "acct_1"})
    """

    def get_document(self, collection: str, document_id: str) -> dict[str, Any] | None:
        """
        Fetch a single document.

        Args:
            collection: Logical collection name (e.g. "mentors")
            document_id: Document id within the collection

        Returns:
            Document fields plus "id", or None if the document doesn't exist

        Raises:
            DocumentStoreError: The backend call failed
        """
        ...

    def update_document(
        self,
        collection: str,
        document_id: str,
        patch: dict[str, Any],
    ) -> None:
        """
        Merge fields into an existing document.

        Args:
            collection: Logical collection name
            document_id: Document id within the collection
            patch: Fields to set; other fields are left untouched

        Raises:
            DocumentNotFoundError: The document doesn't exist
            DocumentStoreError: The backend call failed
        """
        ...

    def ping(self) -> bool:
        """Return True if the backend is reachable."""
        ...
