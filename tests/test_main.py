"""Tests for main API endpoints"""

import pytest
from fastapi.testclient import TestClient


def test_root_endpoint(client: TestClient):
    """Test root endpoint returns expected response"""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "FieldOps API"
    assert data["status"] == "running"


def test_health_check(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.unit
def test_api_version(client: TestClient):
    """Test API version is returned"""
    response = client.get("/")
    assert response.json()["version"] == "1.0.0"


def test_unknown_route_is_problem_document(client: TestClient):
    response = client.get("/api/v1/nowhere")
    assert response.status_code == 404
    data = response.json()
    assert data["status"] == 404
    assert data["title"] == "Not Found"


def test_cors_preflight_allows_credentials(client: TestClient):
    response = client.options(
        "/api/v1/auth/user",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.headers["access-control-allow-credentials"] == "true"


def test_http_error_title_is_reason_phrase(client: TestClient):
    response = client.delete("/health")
    assert response.status_code == 405
    data = response.json()
    assert data["title"] == "Method Not Allowed"
    assert data["detail"] == "Method Not Allowed"
    assert data["type"].endswith("/method_not_allowed")


def test_openapi_documents_problem_responses(client: TestClient):
    schema = client.get("/openapi.json").json()
    assert "ProblemDetail" in schema["components"]["schemas"]
    responses = schema["paths"]["/api/v1/photos/{photo_id}"]["get"]["responses"]
    assert responses["403"]["content"]["application/json"]["schema"]["$ref"].endswith("/ProblemDetail")
