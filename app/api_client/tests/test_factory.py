"""
Tests for get_api_client selection.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from api_client import ApiClient, MockApiClient, get_api_client


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestGetApiClient:
    """Test get_api_client."""

    def test_explicit_mock(self, session):
        client = get_api_client("https://api.example.com", use_mock=True, session=session)

        assert isinstance(client, MockApiClient)
        session.get.assert_not_called()

    def test_explicit_real(self, session):
        client = get_api_client("https://api.example.com", use_mock=False, session=session)

        assert isinstance(client, ApiClient)
        assert client.session is session
        session.get.assert_not_called()

    def test_setting_decides(self, settings, session):
        settings.API_CLIENT_USE_MOCKS = True

        assert isinstance(get_api_client(session=session), MockApiClient)

    def test_health_check_reachable(self, settings, session):
        settings.API_CLIENT_USE_MOCKS = None
        session.get.return_value = MagicMock(ok=True)

        client = get_api_client("https://api.example.com", session=session)

        assert isinstance(client, ApiClient)
        session.get.assert_called_once_with("https://api.example.com/health/", timeout=3)

    def test_health_check_unreachable_falls_back(self, settings, session):
        settings.API_CLIENT_USE_MOCKS = None
        settings.STRIPE_PUBLISHABLE_KEY = "pk_test_abc"
        session.get.side_effect = requests.ConnectionError("refused")

        client = get_api_client("https://api.example.com", session=session)

        assert isinstance(client, MockApiClient)
        assert client.publishable_key == "pk_test_abc"

    def test_health_check_unhealthy_falls_back(self, settings, session):
        settings.API_CLIENT_USE_MOCKS = None
        session.get.return_value = MagicMock(ok=False)

        assert isinstance(get_api_client("https://api.example.com", session=session), MockApiClient)
