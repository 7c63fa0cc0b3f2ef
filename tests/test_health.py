"""
Tests for health check endpoints.
"""
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from employee_events.health import HealthChecker
from employee_events.main import create_app
from employee_events.store.memory import InMemoryEventStore
from employee_events.transport.memory import InMemoryTransport


@pytest.fixture
def client(settings):
    app = create_app(settings, transport=InMemoryTransport(), store=InMemoryEventStore())
    return TestClient(app)


def test_health_liveness(client, settings):
    """Test liveness health check."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == settings.SERVICE_NAME
    assert data["version"] == "0.1.0"
    assert "timestamp" in data


def test_health_readiness(client):
    """Test readiness health check."""
    r = client.get("/health/ready")
    # Should be 200 (ready) or 503 (not ready) depending on host resources
    assert r.status_code in [200, 503]
    data = r.json()
    assert data["checks"]["transport"]["status"] == "ok"
    assert data["checks"]["store"]["status"] == "ok"
    assert "disk_space" in data["checks"]
    assert "memory" in data["checks"]


@pytest.mark.asyncio
async def test_readiness_not_ready_when_store_down():
    """Test an unreachable store makes the service not ready."""
    store = InMemoryEventStore()
    store.health_check = AsyncMock(return_value=False)
    checker = HealthChecker(InMemoryTransport(), store)

    result = await checker.readiness()

    assert result["status"] == "not_ready"
    assert result["checks"]["store"]["status"] == "error"


@pytest.mark.asyncio
async def test_readiness_handles_probe_exceptions():
    """Test a raising probe is reported, not propagated."""
    transport = InMemoryTransport()
    transport.health_check = AsyncMock(side_effect=ConnectionError("refused"))
    checker = HealthChecker(transport, InMemoryEventStore())

    result = await checker.readiness()

    assert result["status"] == "not_ready"
    assert result["checks"]["transport"] == {"status": "error", "error": "refused"}


def test_metrics_endpoint(client):
    """Test Prometheus metrics endpoint."""
    client.get("/health")
    r = client.get("/metrics")
    assert r.status_code == 200
    content = r.text
    assert "http_requests_total" in content
    assert "http_request_duration_seconds" in content
    assert "app_up" in content
    assert "employee_events_received_total" in content
    assert "employee_events_dropped_total" in content
