"""Integration tests for /health and /metrics endpoints."""

import pytest
from fastapi.testclient import TestClient

from backend.trips.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_returns_prometheus_format(self, client: TestClient) -> None:
        """Test /metrics returns Prometheus text format."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]

    def test_metrics_includes_provider_metrics(self, client: TestClient) -> None:
        """Test /metrics includes provider and composition metrics."""
        from backend.trips.utils.metrics import PrometheusProviderMetrics

        metrics = PrometheusProviderMetrics()
        metrics.record_latency("flights", "success", 120)
        metrics.inc_fallback("hotels", "timeout")
        metrics.inc_packages("budget")

        response = client.get("/metrics")

        assert response.status_code == 200
        text = response.text
        assert "provider_latency_ms" in text
        assert 'provider_fallbacks_total{provider="hotels",reason="timeout"}' in text
        assert 'packages_composed_total{tier="budget"}' in text

    def test_metrics_can_be_scraped_multiple_times(self, client: TestClient) -> None:
        response1 = client.get("/metrics")
        response2 = client.get("/metrics")

        assert response1.status_code == 200
        assert response2.status_code == 200
        assert len(response1.text) > 0


class TestRootEndpoint:
    def test_root_returns_api_info(self, client: TestClient) -> None:
        """Test root endpoint returns API information."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Trip Package API"
        assert data["version"] == "0.1.0"
