"""
Core Application - Infrastructure & Base Classes

This package contains infrastructure code shared by the domain apps:

- Generic, reusable base classes (no domain-specific logic)
- Clear extension points for domain apps
- Infrastructure concerns separated from business logic

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - ConflictError: State conflicts (duplicates, etc.)
    - ExternalServiceError: Third-party service failures

Protocols (import from core.protocols):
    - DocumentStore: Document database interface

Helpers (import from core.helpers):
    - epoch_millis: Timestamps in the document store's format
    - get_request_origin: scheme://host of a request
    - first_error_message: First message out of serializer errors

Exception handler (core.exception_handler):
    - api_exception_handler: Renders DRF and application errors as {"error": ...}

Views (core.views):
    - health_check: Liveness/readiness endpoint

Usage:
    from core.services import BaseService, ServiceResult
    from core.exceptions import ValidationError, NotFoundError
    from core.helpers import epoch_millis

    class BalanceService(BaseService):
        def get_balance(self, mentor_id: str) -> ServiceResult:
            ...

Note:
    - Business logic should NOT go here. Extend core classes in your domain apps.
"""

# Services
from .services import BaseService, ServiceResult

# Exceptions
from .exceptions import (
    BaseApplicationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)

# Protocols
from .protocols import DocumentStore

# Helpers
from .helpers import epoch_millis, first_error_message, get_request_origin

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ExternalServiceError",
    # Protocols
    "DocumentStore",
    # Helpers
    "epoch_millis",
    "first_error_message",
    "get_request_origin",
]
