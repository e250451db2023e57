"""Health endpoint tests."""

import shutil

from fastapi.testclient import TestClient


def test_liveness_returns_200(client: TestClient) -> None:
    """Liveness endpoint returns 200 OK."""
    response = client.get("/health/live")
    assert response.status_code == 200


def test_liveness_returns_status(client: TestClient) -> None:
    """Liveness endpoint returns alive status."""
    response = client.get("/health/live")
    data = response.json()
    assert "status" in data
    assert data["status"] == "alive"


def test_readiness_reports_ready(client: TestClient) -> None:
    """Readiness passes when upload dir and database are usable."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["subscribers"] == 0
    assert {c["status"] for c in data["checks"]} == {"ok"}


def test_readiness_fails_without_upload_dir(client: TestClient) -> None:
    """Readiness returns 503 when the upload directory disappears."""
    shutil.rmtree(client.app.state.blob_store.root)

    response = client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
