"""
Integration tests for System API endpoints.

Tests health check and system status.
"""

import inspect

import pytest
from fastapi.routing import APIRoute

from api.deps import get_current_identity


class TestHealthCheck:
    """Tests for system health endpoints."""

    @pytest.mark.api
    def test_health_endpoint(self, api_client):
        """Test /health endpoint."""
        response = api_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "taskdesk-api"

    @pytest.mark.api
    def test_root_endpoint(self, api_client):
        """Test root endpoint."""
        response = api_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "TaskDesk API"
        assert data["message"] == "Backend API is running!"
        assert "version" in data

    @pytest.mark.api
    def test_system_status(self, api_client):
        """Test /api/system/status endpoint."""
        response = api_client.get("/api/system/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["storage"] == "ok"

    @pytest.mark.api
    def test_docs_endpoint(self, api_client):
        """Test OpenAPI docs endpoint."""
        response = api_client.get("/docs")
        assert response.status_code == 200

    @pytest.mark.api
    def test_openapi_schema(self, api_client):
        """Test OpenAPI schema lists the task routes."""
        response = api_client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/tasks" in paths
        assert "/api/tasks/stats" in paths
        assert "/api/tasks/{task_id}" in paths

    @pytest.mark.api
    def test_unknown_route(self, api_client):
        response = api_client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.api
    def test_openapi_declares_bearer_auth(self, api_client):
        """Protected routes advertise the bearer scheme so /docs can authorize."""
        schema = api_client.get("/openapi.json").json()

        schemes = schema["components"]["securitySchemes"]
        assert schemes["HTTPBearer"]["type"] == "http"
        assert schemes["HTTPBearer"]["scheme"] == "bearer"
        assert schema["paths"]["/api/tasks"]["get"]["security"] == [{"HTTPBearer": []}]
        assert "security" not in schema["paths"]["/api/auth/login"]["post"]


class TestRouting:

    @pytest.mark.api
    def test_store_backed_routes_are_sync(self, api_app):
        """bcrypt and file I/O run in the threadpool, not on the event loop."""
        routes = [r for r in api_app.routes if isinstance(r, APIRoute) and r.path.startswith("/api")]

        assert routes
        assert [r.path for r in routes if inspect.iscoroutinefunction(r.endpoint)] == []
        assert not inspect.iscoroutinefunction(get_current_identity)
