"""Tests for GET /health."""


def test_health_check_should_return_ok(client):
    # Act
    resp = client.get("/health")

    # Assert
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "theme-presets-backend"}


def test_health_check_should_echo_request_id(client):
    # Act
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})

    # Assert
    assert resp.headers["X-Request-ID"] == "req-123"


def test_health_check_should_generate_request_id(client):
    resp = client.get("/health")
    assert len(resp.headers["X-Request-ID"]) == 12
