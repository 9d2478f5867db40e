"""
Mentor record access.

Mentor documents are owned by the front-end; this service only reads them
and, when a Connect account is created, writes back two fields:

    {"stripeAccountId": "acct_...", "updatedAt": <epoch ms>}

Everything else on the document is left untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.exceptions import ConflictError
from core.helpers import epoch_millis
from documents import COLLECTIONS, get_document_store

if TYPE_CHECKING:
    from typing import Any

    from core.protocols import DocumentStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MentorRecord:
    """
    A mentor document as read from the store.

    Attributes:
        id: Document id (the mentor id used in URLs)
        stripe_account_id: Connected account id, None until onboarding starts
        data: The raw document fields
    """

    id: str
    stripe_account_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> MentorRecord:
        return cls(
            id=str(document["id"]),
            stripe_account_id=document.get("stripeAccountId") or None,
            data=document,
        )

    @property
    def has_stripe_account(self) -> bool:
        return bool(self.stripe_account_id)


class MentorRepository:
    """
    Reads mentor records and links them to Connect accounts.

    Usage:
        mentors = MentorRepository(get_document_store())
        mentor = mentors.get("m1")
        if mentor and not mentor.has_stripe_account:
            mentors.link_stripe_account(mentor.id, "acct_123")

    Note:
        link_stripe_account reads then writes without a transaction. Two
        concurrent links for the same mentor can both pass the check.
    """

    collection = COLLECTIONS.MENTORS

    def __init__(self, store: DocumentStore):
        self.store = store

    def get(self, mentor_id: str) -> MentorRecord | None:
        document = self.store.get_document(self.collection, mentor_id)
        if document is None:
            return None
        return MentorRecord.from_document(document)

    def link_stripe_account(self, mentor_id: str, account_id: str) -> None:
        """
        Store the Connect account id on the mentor document.

        Args:
            mentor_id: Mentor document id
            account_id: Stripe connected account id

        Raises:
            ConflictError: Mentor already references a different account
            DocumentNotFoundError: Mentor document doesn't exist
        """
        current = self.get(mentor_id)
        if current is not None and current.stripe_account_id not in (None, account_id):
            logger.error(
                "Refusing to overwrite mentor Stripe account",
                extra={
                    "mentor_id": mentor_id,
                    "existing_account_id": current.stripe_account_id,
                    "new_account_id": account_id,
                },
            )
            raise ConflictError(
                "Mentor is already linked to a different Stripe account",
                error_code="STRIPE_ACCOUNT_ALREADY_LINKED",
                details={"mentor_id": mentor_id},
            )

        self.store.update_document(
            self.collection,
            mentor_id,
            {"stripeAccountId": account_id, "updatedAt": epoch_millis()},
        )
        logger.info(
            "Linked mentor to Stripe account",
            extra={"mentor_id": mentor_id, "account_id": account_id},
        )


def get_mentor_repository() -> MentorRepository:
    """Repository over the configured document store."""
    return MentorRepository(get_document_store())
