"""Tests for MentorRecord and MentorRepository."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from core.exceptions import ConflictError
from documents import COLLECTIONS
from documents.backends.locmem import LocMemDocumentStore
from documents.exceptions import DocumentNotFoundError
from mentors import MentorRecord, MentorRepository


@pytest.fixture
def store():
    return LocMemDocumentStore()


@pytest.fixture
def mentors(store):
    return MentorRepository(store)


class TestMentorRecord:
    """Test MentorRecord.from_document."""

    def test_reads_stripe_account_id(self):
        record = MentorRecord.from_document({"id": "m1", "stripeAccountId": "acct_1"})

        assert record.id == "m1"
        assert record.stripe_account_id == "acct_1"
        assert record.has_stripe_account is True

    def test_empty_account_id_means_not_connected(self):
        """An empty string written by the front-end counts as absent."""
        record = MentorRecord.from_document({"id": "m1", "stripeAccountId": ""})

        assert record.stripe_account_id is None
        assert record.has_stripe_account is False

    def test_keeps_raw_fields(self):
        record = MentorRecord.from_document({"id": "m1", "name": "Ada"})

        assert record.data["name"] == "Ada"


class TestMentorRepositoryGet:
    """Test MentorRepository.get."""

    def test_missing_mentor_returns_none(self, mentors):
        assert mentors.get("nobody") is None

    def test_reads_from_mentors_collection(self, store, mentors):
        store.put_document(COLLECTIONS.MENTORS, "m1", {"stripeAccountId": "acct_1"})

        record = mentors.get("m1")

        assert record.stripe_account_id == "acct_1"


class TestLinkStripeAccount:
    """Test MentorRepository.link_stripe_account."""

    def test_writes_account_id_and_timestamp(self, store, mentors):
        store.put_document(COLLECTIONS.MENTORS, "m1", {"name": "Ada"})

        with patch("mentors.records.epoch_millis", return_value=1700000000000):
            mentors.link_stripe_account("m1", "acct_new")

        assert store.get_document(COLLECTIONS.MENTORS, "m1") == {
            "id": "m1",
            "name": "Ada",
            "stripeAccountId": "acct_new",
            "updatedAt": 1700000000000,
        }

    def test_relinking_same_account_is_allowed(self, store, mentors):
        store.put_document(COLLECTIONS.MENTORS, "m1", {"stripeAccountId": "acct_1"})

        mentors.link_stripe_account("m1", "acct_1")

        assert mentors.get("m1").stripe_account_id == "acct_1"

    def test_never_overwrites_different_account(self, store, mentors):
        """An existing, different account id is left in place."""
        store.put_document(COLLECTIONS.MENTORS, "m1", {"stripeAccountId": "acct_old"})

        with pytest.raises(ConflictError):
            mentors.link_stripe_account("m1", "acct_new")

        assert mentors.get("m1").stripe_account_id == "acct_old"

    def test_missing_mentor_raises_not_found(self, mentors):
        with pytest.raises(DocumentNotFoundError):
            mentors.link_stripe_account("ghost", "acct_1")
