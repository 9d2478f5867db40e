"""
Tests for ServiceResult and BaseService.
"""

from __future__ import annotations

import logging

from core.services import BaseService, ServiceResult


class TestServiceResult:
    """Test ServiceResult construction and rendering."""

    def test_success(self):
        result = ServiceResult.success({"id": "pi_1"})

        assert result.success is True
        assert result.data == {"id": "pi_1"}
        assert result.error is None
        assert bool(result) is True

    def test_failure(self):
        result = ServiceResult.failure("Mentor not found", error_code="MENTOR_NOT_FOUND")

        assert result.success is False
        assert result.data is None
        assert result.error_code == "MENTOR_NOT_FOUND"
        assert bool(result) is False

    def test_failure_to_response_merges_details(self):
        result = ServiceResult.failure(
            "Insufficient balance",
            error_code="INSUFFICIENT_BALANCE",
            details={"available": 1200},
        )

        assert result.to_response() == {
            "error": "Insufficient balance",
            "available": 1200,
        }

    def test_failure_to_response_without_details(self):
        """The error code is not part of the client body."""
        result = ServiceResult.failure("Mentor not found", error_code="MENTOR_NOT_FOUND")

        assert result.to_response() == {"error": "Mentor not found"}


class TestBaseService:
    """Test BaseService utilities."""

    def test_logger_named_after_class(self):
        class RefundLikeService(BaseService):
            pass

        logger = RefundLikeService.get_logger()

        assert isinstance(logger, logging.Logger)
        assert logger.name.endswith("RefundLikeService")
