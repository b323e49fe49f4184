"""Integration tests for health endpoints."""

from unittest.mock import patch

from fastapi.testclient import TestClient


class TestHealthEndpoints:
    """Integration tests for health endpoints."""

    def test_health_check_success(self, client: TestClient):
        """Test successful health check."""
        response = client.get("/api/health/")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "healthy"
        assert data["environment"] == "testing"
        assert data["database"]["status"] == "connected"
        assert "pool_size" in data["database"]["info"]

    def test_health_check_database_error(self, client: TestClient):
        """Test health check with database connection error."""
        with patch("user_api.routers.health.check_database_connection", return_value=False):
            response = client.get("/api/health/")

        assert response.status_code == 503

    def test_readiness_probe(self, client: TestClient):
        response = client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_readiness_probe_database_unavailable(self, client: TestClient):
        with patch("user_api.routers.health.check_database_connection", return_value=False):
            response = client.get("/api/health/ready")

        assert response.status_code == 503

    def test_liveness_probe(self, client: TestClient):
        response = client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json()["alive"] is True

    def test_root_endpoint(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["users"] == "/users"
