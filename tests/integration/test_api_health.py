"""Integration tests for health endpoints."""

from fastapi.testclient import TestClient

from pantrylog.exceptions import PersistenceFailureError


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_returns_ok(self, api_client: TestClient):
        """Basic health check should return OK."""
        response = api_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data
        assert "X-Request-ID" in response.headers

    def test_ready_checks_ledger(self, api_client: TestClient):
        """Readiness check should load the ledger."""
        response = api_client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["ledger"]["status"] == "ok"
        assert data["checks"]["ledger"]["backend"] == "memory"
        assert "version" in data

    def test_ready_reports_degraded_ledger(self, api_client: TestClient, service, monkeypatch):
        """A failing backend makes the service degraded, not down."""
        def fail():
            raise PersistenceFailureError("disk unavailable")

        monkeypatch.setattr(service.ledger.backend, "load_all", fail)

        response = api_client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["checks"]["ledger"]["message"] == "disk unavailable"

    def test_info_returns_service_info(self, api_client: TestClient):
        """Info endpoint should return service metadata."""
        response = api_client.get("/health/info")

        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert "version" in data
        assert data["storage_backend"] == "memory"
