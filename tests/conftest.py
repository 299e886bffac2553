"""
Test configuration and fixtures for the link proxy.
Settings and the Short.io client are swapped through FastAPI dependency
overrides, so no test ever reaches the real API.
"""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from main import app
from linkproxy_app.config import Settings
from linkproxy_app.dependencies import get_settings, get_shortio_client

TEST_DOMAIN = "sho.rt"


class FakeShortIOClient:
    """In-memory stand-in for ShortIOClient that records every call"""

    def __init__(self):
        self.calls: List[tuple] = []
        self.responses: Dict[str, Any] = {}
        self.error: Optional[Exception] = None

    def _record(self, name: str, *args) -> Any:
        self.calls.append((name,) + args)
        if self.error is not None:
            raise self.error
        return self.responses.get(name)

    def list_links(self, domain, limit, search=None, page_token=None):
        return self._record("list_links", domain, limit, search, page_token)

    def get_link(self, link_id):
        return self._record("get_link", link_id)

    def create_link(self, payload):
        return self._record("create_link", payload)

    def update_link(self, link_id, payload):
        return self._record("update_link", link_id, payload)

    def delete_link(self, link_id):
        return self._record("delete_link", link_id)

    def list_domains(self):
        return self._record("list_domains")


@pytest.fixture(scope="function")
def test_settings():
    return Settings(
        _env_file=None,
        short_io_api_key="test-api-key",
        short_io_domain=TEST_DOMAIN,
    )


@pytest.fixture(scope="function")
def fake_client():
    return FakeShortIOClient()


@pytest.fixture(scope="function")
def client(test_settings, fake_client):
    """
    Test client with settings and upstream client overridden.
    This is the main fixture that tests will use.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_shortio_client] = lambda: fake_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def unconfigured_client():
    """Test client whose settings lack the API key and domain"""
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, short_io_api_key=None, short_io_domain=None
    )

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
