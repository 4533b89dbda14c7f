"""Tests for the health endpoints."""

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "bookshelf"}


def test_readiness_endpoint(client: TestClient):
    response = client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["environment"] == "test"
    assert data["checks"]["database"] == {"status": "healthy", "type": "sqlite"}


def test_readiness_reports_unreachable_database(client: TestClient, monkeypatch):
    database_service = client.app.state.app_dependencies.database_service
    monkeypatch.setattr(database_service, "health_check", lambda: False)

    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
