"""
Integration tests for the session lifecycle API.
"""
import pytest
from fastapi.testclient import TestClient

from subfeed.api import dependencies
from subfeed.config import get_settings
from subfeed.main import app


class TestSessionAPI:
    def test_initialized_at_startup(self, test_client: TestClient):
        response = test_client.get("/v1/session")

        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "signed_out"
        assert data["sign_in_available"] is True
        assert data["error"] is None

    def test_initialize_again_is_noop(self, test_client: TestClient):
        response = test_client.post("/v1/session/initialize")

        assert response.status_code == 200
        assert response.json()["state"] == "signed_out"

    def test_sign_in_and_out(self, test_client: TestClient):
        response = test_client.post("/v1/session/sign-in", json={"access_token": "tok"})
        assert response.status_code == 200
        assert response.json()["state"] == "signed_in"

        response = test_client.post("/v1/session/sign-out")
        assert response.status_code == 200
        assert response.json()["state"] == "signed_out"

    def test_cancelled_sign_in(self, test_client: TestClient):
        response = test_client.post("/v1/session/sign-in", json={})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_ACTION_ERROR"

        session = test_client.get("/v1/session").json()
        assert session["state"] == "signed_out"
        assert "cancelled" in session["error"]


@pytest.fixture
def unconfigured_client(monkeypatch, catalog):
    """App started with placeholder credentials."""
    monkeypatch.setenv("GOOGLE_CLIENT_ID", "YOUR_CLIENT_ID")
    monkeypatch.setenv("YT_API_KEY", "")
    monkeypatch.setenv("CATALOG_BACKEND", "memory")
    get_settings.cache_clear()
    dependencies.clear_caches()
    with monkeypatch.context() as patch:
        patch.setattr(dependencies, "get_catalog_gateway", lambda: catalog)

        with TestClient(app) as client:
            yield client

    dependencies.clear_caches()
    get_settings.cache_clear()


class TestUnconfiguredSession:
    def test_sign_in_disabled(self, unconfigured_client: TestClient):
        data = unconfigured_client.get("/v1/session").json()

        assert data["state"] == "init_error"
        assert data["sign_in_available"] is False
        assert "configured" in data["error"]

    def test_sign_in_attempt_is_noop(self, unconfigured_client: TestClient, catalog):
        response = unconfigured_client.post("/v1/session/sign-in", json={"access_token": "tok"})

        assert response.status_code == 200
        assert response.json()["state"] == "init_error"
        assert catalog.calls == []

    def test_readiness_reports_configuration(self, unconfigured_client: TestClient):
        data = unconfigured_client.get("/health/ready").json()

        assert data["session"]["state"] == "init_error"
        assert data["catalog"]["credentials_configured"] is False
