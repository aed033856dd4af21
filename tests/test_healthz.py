"""
Test health and metrics endpoints.
"""
from app.config import CORS_HEADERS, SERVICE_NAME, SERVICE_VERSION


def test_health_check(test_client):
    """Test health check response."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["service"] == SERVICE_NAME == "mycolor-api"
    assert data["version"] == SERVICE_VERSION
    assert response.headers["Access-Control-Allow-Origin"] == CORS_HEADERS["Access-Control-Allow-Origin"]


def test_metrics_summary(test_client):
    """Metrics summary includes counters after a request."""
    test_client.post("/api/analyze-colors", json={})

    response = test_client.get("/metrics")

    assert response.status_code == 200
    data = response.json()
    assert data["counters"]["analyze_requests_total"] == 1
    assert data["uptime_seconds"] >= 0
    assert "timing_stats" in data


def test_unknown_route_uses_error_shape(test_client):
    response = test_client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
