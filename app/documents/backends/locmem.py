"""
In-process document store.

Keeps documents in a per-process dict guarded by a lock. Used for local
preview without a Firestore project and as the test backend. Data is lost
on restart and is not shared between worker processes.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import TYPE_CHECKING

from documents.exceptions import DocumentNotFoundError

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)


class LocMemDocumentStore:
    """
    Dict-backed DocumentStore.

    Documents are deep-copied on the way in and out so callers can't
    mutate stored state by accident.

    Usage:
        store = LocMemDocumentStore()
        store.put_document("mentors", "m1", {"name": "Ada"})
        store.get_document("mentors", "m1")
        # {"id": "m1", "name": "Ada"}
    """

    def __init__(self, **options: Any):
        # Options accepted for settings compatibility with other backends
        self._documents: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()
        if options:
            logger.debug(
                "LocMemDocumentStore ignoring options",
                extra={"options": sorted(options)},
            )

    def get_document(self, collection: str, document_id: str) -> dict[str, Any] | None:
        with self._lock:
            document = self._documents.get(collection, {}).get(document_id)
            if document is None:
                return None
            return {"id": document_id, **copy.deepcopy(document)}

    def update_document(
        self,
        collection: str,
        document_id: str,
        patch: dict[str, Any],
    ) -> None:
        with self._lock:
            document = self._documents.get(collection, {}).get(document_id)
            if document is None:
                raise DocumentNotFoundError(
                    f"Document {collection}/{document_id} not found",
                    details={"collection": collection, "document_id": document_id},
                )
            document.update(copy.deepcopy(patch))

    def put_document(
        self,
        collection: str,
        document_id: str,
        data: dict[str, Any],
    ) -> None:
        """Create or replace a document."""
        fields = {key: value for key, value in data.items() if key != "id"}
        with self._lock:
            self._documents.setdefault(collection, {})[document_id] = copy.deepcopy(fields)

    def clear(self) -> None:
        """Drop every document in every collection."""
        with self._lock:
            self._documents.clear()

    def ping(self) -> bool:
        return True
