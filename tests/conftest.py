"""
Pytest configuration and shared fixtures for testing.
"""

from unittest.mock import MagicMock

import pytest
import requests

from cf_terraforming.core.cloudflare_client import CloudflareClient
from cf_terraforming.core.config import ImportConfig, Scope

CLOUDFLARE_ENV_VARS = (
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_EMAIL",
    "CLOUDFLARE_API_KEY",
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_ZONE_ID",
    "CLOUDFLARE_API_HOSTNAME",
)


def _make_response(result=None, success=True, status_code=200, errors=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = {
        "success": success,
        "errors": errors or [],
        "messages": [],
        "result": result,
    }
    return response


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects carrying a Cloudflare v4 envelope."""
    return _make_response


@pytest.fixture(autouse=True)
def clean_cloudflare_env(monkeypatch):
    """Keep real Cloudflare credentials in the environment out of tests."""
    for name in CLOUDFLARE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def account_scope():
    return Scope(account_id="acc1")


@pytest.fixture
def zone_scope():
    return Scope(zone_id="zone1")


@pytest.fixture
def mock_session():
    """A mocked requests.Session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def cf_client(mock_session):
    """A CloudflareClient whose HTTP session is mocked."""
    client = CloudflareClient(api_token="test-token")
    client._session = mock_session
    return client


@pytest.fixture
def fake_client():
    """A stand-in client whose get() is a mock returning no records."""
    client = MagicMock(spec=CloudflareClient)
    client.get.return_value = []
    return client


@pytest.fixture
def zone_config(zone_scope):
    return ImportConfig(scope=zone_scope)


@pytest.fixture
def account_config(account_scope):
    return ImportConfig(scope=account_scope)
