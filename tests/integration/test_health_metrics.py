"""Integration tests for /healthz and /metrics endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from tourdesk.app.main import app

pytestmark = pytest.mark.integration


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test /health and /healthz endpoints."""

    def test_health_always_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @patch("tourdesk.app.api.routes.health.check_db")
    @patch("tourdesk.app.api.routes.health.check_redis")
    def test_healthz_returns_200_when_all_ok(
        self,
        mock_check_redis: MagicMock,
        mock_check_db: MagicMock,
        client: TestClient,
    ) -> None:
        """Test /healthz returns 200 when DB and Redis are healthy."""
        mock_check_db.return_value = (True, "ok")
        mock_check_redis.return_value = (True, "ok")

        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"]["db"] == "ok"
        assert data["components"]["redis"] == "ok"

    @patch("tourdesk.app.api.routes.health.check_db")
    @patch("tourdesk.app.api.routes.health.check_redis")
    def test_healthz_returns_503_when_db_fails(
        self,
        mock_check_redis: MagicMock,
        mock_check_db: MagicMock,
        client: TestClient,
    ) -> None:
        """Test /healthz returns 503 when DB check fails."""
        mock_check_db.return_value = (False, "connection refused")
        mock_check_redis.return_value = (True, "ok")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["db"] == "connection refused"
        assert data["components"]["redis"] == "ok"

    @patch("tourdesk.app.api.routes.health.check_db")
    @patch("tourdesk.app.api.routes.health.check_redis")
    def test_healthz_returns_503_when_redis_fails(
        self,
        mock_check_redis: MagicMock,
        mock_check_db: MagicMock,
        client: TestClient,
    ) -> None:
        """Test /healthz returns 503 when Redis check fails."""
        mock_check_db.return_value = (True, "ok")
        mock_check_redis.return_value = (False, "timeout")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["redis"] == "timeout"

    def test_healthz_against_sqlite(self, client: TestClient) -> None:
        """Test the real DB check passes on the test database without Redis configured."""
        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["components"]["db"] == "ok"
        assert data["components"]["redis"] == "not_configured"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_returns_prometheus_format(self, client: TestClient) -> None:
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "# HELP" in response.text

    def test_metrics_includes_travel_id_and_night_metrics(self, client: TestClient) -> None:
        """Test /metrics exposes the allocation and reallocation counters."""
        from tourdesk.app.utils.metrics import (
            PrometheusTravelIdMetrics,
            night_reallocations_total,
        )

        PrometheusTravelIdMetrics().record_attempt("TOURILLO", "collision")
        PrometheusTravelIdMetrics().inc_failure("TOURILLO")
        night_reallocations_total.labels(clamped="true").inc()

        text = client.get("/metrics").text

        assert "travel_id_attempts_total" in text
        assert "travel_id_allocation_failures_total" in text
        assert "night_reallocations_total" in text


class TestRootEndpoint:
    """Test root endpoint."""

    def test_root_returns_api_info(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Tour Desk API"
        assert data["version"] == "0.1.0"
