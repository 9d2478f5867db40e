"""
Cloud Firestore document store.

Wraps google-cloud-firestore's synchronous client. The client is created
on first use so a misconfigured project surfaces as a DocumentStoreError
on the request that needs it (and in the health check) rather than at
import time.

Configuration (settings.DOCUMENT_STORE["OPTIONS"]):
    - project: Google Cloud project id (FIRESTORE_PROJECT_ID)
    - database: Firestore database id (FIRESTORE_DATABASE)
    - credentials_file: Service account JSON path (FIRESTORE_CREDENTIALS_FILE);
      Application Default Credentials are used when omitted

FIRESTORE_EMULATOR_HOST is read by the client library directly.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore

from documents.exceptions import DocumentNotFoundError, DocumentStoreError

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)

# Call-time failures of the client library (including RetryError on deadline)
# and of its credentials.
BACKEND_ERRORS = (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError)


class FirestoreDocumentStore:
    """
    DocumentStore backed by Cloud Firestore.

    The underlying client is thread-safe; one instance serves the whole
    process.

    Usage:
        store = FirestoreDocumentStore(project="mentorship-prod")
        mentor = store.get_document("mentors", "m1")
    """

    def __init__(
        self,
        project: str | None = None,
        database: str | None = None,
        credentials_file: str | None = None,
        client: firestore.Client | None = None,
    ):
        self.project = project
        self.database = database
        self.credentials_file = credentials_file
        self._client = client
        self._client_lock = threading.Lock()

    def _get_client(self) -> firestore.Client:
        """Create the Firestore client on first use."""
        if self._client is not None:
            return self._client

        with self._client_lock:
            if self._client is None:
                try:
                    if self.credentials_file:
                        self._client = firestore.Client.from_service_account_json(
                            self.credentials_file,
                            project=self.project,
                            database=self.database,
                        )
                    else:
                        self._client = firestore.Client(
                            project=self.project,
                            database=self.database,
                        )
                except (auth_exceptions.GoogleAuthError, OSError, ValueError) as e:
                    logger.error(
                        "Could not initialize Firestore client",
                        extra={"project": self.project, "database": self.database},
                        exc_info=True,
                    )
                    raise DocumentStoreError(
                        "Document store is not configured",
                        error_code="DOCUMENT_STORE_NOT_CONFIGURED",
                    ) from e
        return self._client

    def get_document(self, collection: str, document_id: str) -> dict[str, Any] | None:
        log_context = {
            "operation": "get_document",
            "collection": collection,
            "document_id": document_id,
        }
        start_time = time.time()

        try:
            snapshot = self._document(collection, document_id).get()
        except BACKEND_ERRORS as e:
            self._log_failure(e, log_context, start_time)
            raise DocumentStoreError(
                f"Failed to read {collection}/{document_id}",
                details={"collection": collection, "document_id": document_id},
            ) from e

        logger.debug(
            "Document store operation completed",
            extra={
                **log_context,
                "exists": snapshot.exists,
                "duration_ms": (time.time() - start_time) * 1000,
            },
        )

        if not snapshot.exists:
            return None
        return {"id": snapshot.id, **(snapshot.to_dict() or {})}

    def update_document(
        self,
        collection: str,
        document_id: str,
        patch: dict[str, Any],
    ) -> None:
        log_context = {
            "operation": "update_document",
            "collection": collection,
            "document_id": document_id,
            "fields": sorted(patch),
        }
        start_time = time.time()

        try:
            self._document(collection, document_id).update(patch)
        except google_exceptions.NotFound as e:
            self._log_failure(e, log_context, start_time)
            raise DocumentNotFoundError(
                f"Document {collection}/{document_id} not found",
                details={"collection": collection, "document_id": document_id},
            ) from e
        except BACKEND_ERRORS as e:
            self._log_failure(e, log_context, start_time)
            raise DocumentStoreError(
                f"Failed to update {collection}/{document_id}",
                details={"collection": collection, "document_id": document_id},
            ) from e

        logger.info(
            "Document store operation completed",
            extra={**log_context, "duration_ms": (time.time() - start_time) * 1000},
        )

    def ping(self) -> bool:
        try:
            next(iter(self._get_client().collections()), None)
        except (*BACKEND_ERRORS, DocumentStoreError):
            logger.warning("Firestore ping failed", exc_info=True)
            return False
        return True

    def _document(
        self,
        collection: str,
        document_id: str,
    ) -> firestore.DocumentReference:
        """
        Reference to one document.

        Raises:
            DocumentStoreError: The id is not a single path segment
        """
        try:
            return self._get_client().collection(collection).document(document_id)
        except ValueError as e:
            logger.warning(
                "Invalid document id",
                extra={"collection": collection, "document_id": document_id},
            )
            raise DocumentStoreError(
                f"Invalid document id for {collection}: {document_id!r}",
                error_code="INVALID_DOCUMENT_ID",
                details={"collection": collection, "document_id": document_id},
            ) from e

    @staticmethod
    def _log_failure(
        error: Exception,
        log_context: dict[str, Any],
        start_time: float,
    ) -> None:
        logger.error(
            f"Document store error: {type(error).__name__}",
            extra={**log_context, "duration_ms": (time.time() - start_time) * 1000},
            exc_info=True,
        )
