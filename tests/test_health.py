import pytest
from fastapi import status

from app.dependencies import get_directory
from app.main import app

def test_health_check(client):
    """Test the /health endpoint returns 200 and up status."""
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "up"
    assert "version" in data
    assert "timestamp" in data

def test_readiness_check(client):
    """Test the /readiness endpoint reports the spreadsheet as connected."""
    response = client.get("/readiness")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "ready"
    assert data["components"]["employee_directory"] == "connected"

def test_readiness_fails_when_sheet_unreachable(client, make_directory):
    """Test /readiness returns 503 when the sheet cannot be read."""
    blocked = make_directory(accessible=False)
    app.dependency_overrides[get_directory] = lambda: blocked
    response = client.get("/readiness")
    assert response.status_code == 503
    assert response.json()["success"] is False

def test_root_endpoint(client):
    """Test the API root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert "School Payslip Generator API" in response.json()["message"]

def test_liveness_alias(client):
    response = client.get("/liveness")
    assert response.status_code == 200
    assert response.json()["status"] == "up"

def test_request_id_is_echoed(client):
    """Test the correlation ID header round-trips."""
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"
    assert "X-Process-Time" in response.headers

def test_request_id_is_generated(client):
    response = client.get("/health")
    assert response.headers.get("X-Request-ID")
