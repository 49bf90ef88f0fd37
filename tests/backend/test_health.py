"""
Tests for the HTTP API.

These tests verify:
- Basic health endpoint returns 200
- Readiness check reports MongoDB connection status
- Bootstrap status endpoint and its failure mapping
- Optional bootstrap at startup
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch
from pymongo.errors import ServerSelectionTimeoutError

from setdb.models.bootstrap import BootstrapStatus, CollectionStatus, PrincipalStatus
from setdb.routers.bootstrap import get_bootstrap_service


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_endpoint_returns_200_when_api_running(self, client):
        """Basic health check should return 200 if API is up."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_endpoint(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/health"


class TestReadinessEndpoint:
    """Tests for GET /health/ready endpoint."""

    def test_readiness_healthy_when_mongodb_responds(self, client):
        with patch("setdb.routers.health.get_mongo_client") as mock_mongo:
            mock_mongo_client = AsyncMock()
            mock_mongo_client.admin.command = AsyncMock(return_value={"ok": 1})
            mock_mongo.return_value = mock_mongo_client

            response = client.get("/health/ready")

            assert response.status_code == 200
            data = response.json()
            assert data["status"] == "healthy"
            assert data["checks"]["mongodb"] == "healthy"
            assert data["database"] == "rust_app_db"

    def test_readiness_reports_mongodb_unhealthy_when_connection_fails(self, client):
        with patch("setdb.routers.health.get_mongo_client") as mock_mongo:
            mock_mongo.side_effect = ServerSelectionTimeoutError("Connection refused")

            response = client.get("/health/ready")

            assert response.status_code == 200
            data = response.json()
            assert data["status"] == "degraded"
            assert "unhealthy" in data["checks"]["mongodb"]
            assert "api" in data["checks"]


class TestBootstrapStatusEndpoint:
    """Tests for GET /bootstrap/status."""

    def _override(self, app, verify: AsyncMock):
        service = MagicMock()
        service.verify = verify
        app.dependency_overrides[get_bootstrap_service] = lambda: service

    def test_status_returns_verification(self, app, client):
        status = BootstrapStatus(
            database="rust_app_db",
            principal=PrincipalStatus(username="app_user", exists=True, has_role=True),
            collections=[CollectionStatus(name=name, exists=True) for name in ("setplayers", "setgames", "setstats")],
        )
        self._override(app, AsyncMock(return_value=status))

        response = client.get("/bootstrap/status")

        assert response.status_code == 200
        data = response.json()
        assert data["database"] == "rust_app_db"
        assert [c["name"] for c in data["collections"]] == ["setplayers", "setgames", "setstats"]
        assert data["complete"] is True

    def test_status_503_when_mongodb_unavailable(self, app, client):
        self._override(app, AsyncMock(side_effect=ServerSelectionTimeoutError("down")))

        response = client.get("/bootstrap/status")

        assert response.status_code == 503
        assert "unavailable" in response.json()["detail"].lower()


class TestStartupBootstrap:
    """Tests for BOOTSTRAP_ON_STARTUP."""

    def test_bootstrap_runs_at_startup_when_enabled(self, app, make_settings):
        settings = make_settings(bootstrap_on_startup=True)
        with patch("setdb.main.get_settings", return_value=settings), \
             patch("setdb.main.get_mongo_client", AsyncMock(return_value=MagicMock())), \
             patch("setdb.main.BootstrapService") as service_cls:
            service_cls.return_value.run = AsyncMock()

            with TestClient(app):
                pass

            service_cls.return_value.run.assert_awaited_once()

    def test_bootstrap_not_run_by_default(self, app, make_settings):
        with patch("setdb.main.get_settings", return_value=make_settings()), \
             patch("setdb.main.BootstrapService") as service_cls:

            with TestClient(app):
                pass

            service_cls.assert_not_called()

    def test_unreadable_password_file_does_not_block_startup(self, app, make_settings, tmp_path):
        """A missing password file skips the startup bootstrap instead of crashing the API."""
        settings = make_settings(
            bootstrap_on_startup=True,
            app_db_password=None,
            app_db_password_file=tmp_path / "missing",
        )
        mongo = MagicMock()
        with patch("setdb.main.get_settings", return_value=settings), \
             patch("setdb.main.get_mongo_client", AsyncMock(return_value=mongo)):

            with TestClient(app) as c:
                assert c.get("/health").status_code == 200

        mongo.__getitem__.return_value.command.assert_not_called()
