"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's conftest.py.

Test environment defaults are set here, before settings are imported, so
the suite runs without a .env file: the in-memory document store and fake
Stripe test credentials. Real credentials in the environment take
precedence, but every Stripe call in the suite is mocked.
"""

import os

import django

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
os.environ.setdefault("ENV_FILE", os.devnull)
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("SECURE_SSL_REDIRECT", "False")
os.environ.setdefault("DOCUMENT_STORE_BACKEND", "locmem")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_suite")
os.environ.setdefault("STRIPE_PUBLISHABLE_KEY", "pk_test_suite")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_suite")


def pytest_configure():
    """Configure Django settings before tests run."""
    django.setup()
