"""
Unit Tests for HTTP Middleware
"""
from app.core.middleware import extract_mock_project_id, should_skip_logging


class TestExtractMockProjectId:

    def test_mock_path(self):
        assert extract_mock_project_id("/api/mock/abc/users/1", "/api/mock") == "abc"

    def test_project_root(self):
        assert extract_mock_project_id("/api/mock/abc", "/api/mock") == "abc"

    def test_non_mock_path(self):
        assert extract_mock_project_id("/api/projects/abc", "/api/mock") is None

    def test_prefix_only(self):
        assert extract_mock_project_id("/api/mock/", "/api/mock") is None

    def test_default_prefix_from_settings(self):
        assert extract_mock_project_id("/api/mock/xyz/items") == "xyz"


class TestSkipLogging:

    def test_health_skipped(self):
        assert should_skip_logging("/health")

    def test_api_logged(self):
        assert not should_skip_logging("/api/projects")


class TestRequestLoggingMiddleware:
    """Headers added to every response"""

    async def test_request_id_and_timing_headers(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.headers["X-Request-ID"]
        assert response.headers["X-Response-Time"].endswith("ms")

    async def test_incoming_request_id_is_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
