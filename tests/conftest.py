"""
Pytest configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from subfeed.api import dependencies
from subfeed.config import get_settings
from subfeed.gateways.identity import TokenIdentityProvider
from subfeed.gateways.memory import InMemoryCatalogGateway, video_record
from subfeed.main import app
from subfeed.models.schemas import Credentials
from subfeed.services.session import SessionManager
from tests.factories import API_KEY, CLIENT_ID, SCOPE, hours_ago


@pytest.fixture
def credentials():
    """Valid identity provider configuration."""
    return Credentials(client_id=CLIENT_ID, api_key=API_KEY, scope=SCOPE)


@pytest.fixture
def provider():
    """Token identity provider with no persisted session."""
    return TokenIdentityProvider()


@pytest.fixture
def session_manager(provider):
    """Uninitialized session manager."""
    return SessionManager(provider=provider)


@pytest.fixture
def catalog():
    """
    In-memory catalog with two channels.

    UC_a: a1 (long), a2 (#shorts title), shared (long)
    UC_b: b1 (45s clip), b2 (long), shared
    """
    records = [
        video_record("a1", "Long Form A1", hours_ago(1), "PT12M", "Channel A"),
        video_record("a2", "Quick tip #Shorts", hours_ago(2), "PT5M", "Channel A"),
        video_record("shared", "Collab Video", hours_ago(3), "PT20M", "Channel A"),
        video_record("b1", "Tiny Clip", hours_ago(0.5), "PT45S", "Channel B"),
        video_record("b2", "Long Form B2", hours_ago(5), "PT1H5M", "Channel B",
                     thumbnail_url="https://i.ytimg.com/vi/b2/mqdefault.jpg"),
    ]
    return InMemoryCatalogGateway(
        subscriptions=["UC_a", "UC_b"],
        uploads={
            "UC_a": ["a1", "a2", "shared"],
            "UC_b": ["b1", "b2", "shared"],
        },
        videos={r["id"]: r for r in records},
        search_results={"foo": ["a1", "b1", "b2"]},
    )


@pytest.fixture
def configured_env(monkeypatch):
    """Valid credentials and the in-memory backend in the environment."""
    monkeypatch.setenv("GOOGLE_CLIENT_ID", CLIENT_ID)
    monkeypatch.setenv("YT_API_KEY", API_KEY)
    monkeypatch.setenv("CATALOG_BACKEND", "memory")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_client(configured_env, catalog, monkeypatch):
    """
    TestClient fixture with the catalog replaced by the in-memory fixture.
    Singletons are rebuilt per test for isolation.
    """
    dependencies.clear_caches()
    with monkeypatch.context() as patch:
        patch.setattr(dependencies, "get_catalog_gateway", lambda: catalog)

        with TestClient(app) as client:
            yield client

    dependencies.clear_caches()
