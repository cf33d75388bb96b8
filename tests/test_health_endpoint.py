from fastapi.testclient import TestClient

from nodit_mcp.metrics import MetricsRecorder
from nodit_mcp.server import app


def test_health_endpoint():
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json().get("status") == "ok"
    assert resp.headers.get("X-Request-ID")


def test_metrics_endpoint_counts_requests():
    client = TestClient(app)
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    data = resp.json()
    # Two requests so far: /health and /metrics
    assert data.get("requests", 0) >= 2
    assert "policy_rejections" in data


def test_recent_durations_are_capped():
    recorder = MetricsRecorder(max_recent_durations=3)
    for index in range(5):
        recorder.record_duration(f"req-{index}", float(index))
    assert recorder.snapshot()["recent_request_durations_ms"] == {
        "req-2": 2.0,
        "req-3": 3.0,
        "req-4": 4.0,
    }
