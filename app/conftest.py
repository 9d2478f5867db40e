"""
Shared pytest configuration for the apps under app/.

Provides:
- Automatic unit/integration markers based on test file names
- Reset of the process-wide Stripe adapter and document store per test
- The DRF api_client fixture
"""

import pytest


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_views.py, test_services.py, test_handlers.py, etc. → integration
    - test_backends.py, test_records.py, test_serializers.py, etc. → unit
    - Unmatched files → integration (safe default)

    Explicit markers on test functions/classes take precedence.
    """
    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_handlers.py",
        "test_factory.py",
    ]

    unit_patterns = [
        "test_backends.py",
        "test_records.py",
        "test_serializers.py",
        "test_stripe_adapter.py",
        "test_client.py",
        "test_mock.py",
        "test_helpers.py",
        "test_exception_handler.py",
    ]

    for item in items:
        # Skip if test already has unit/integration marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def reset_collaborators():
    """
    Drop the cached Stripe adapter and document store around every test.

    Both are built once per process from settings; tests that change
    settings must see a fresh instance.
    """
    from documents import get_document_store
    from payments.adapters import get_stripe_adapter

    get_stripe_adapter.cache_clear()
    get_document_store.cache_clear()
    yield
    get_stripe_adapter.cache_clear()
    get_document_store.cache_clear()


@pytest.fixture
def api_client():
    """DRF test client for the /api/ endpoints."""
    from rest_framework.test import APIClient

    return APIClient()
