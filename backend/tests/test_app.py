"""
Posts API: Application Wiring Tests
=====================================

What:  Health endpoint, request ID propagation, access log levels and settings.
"""

import importlib
import logging

import pytest
from pydantic import ValidationError

from posts_api.config import Settings
from posts_api.database import _engine_options
from posts_api.middleware.logging import level_for_status


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_with_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_unhealthy_when_database_fails(self, failing_client):
        response = await failing_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/posts")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_is_echoed(self, test_client):
        response = await test_client.get("/posts/12345", headers={"X-Request-ID": "trace-abc"})

        assert response.headers["X-Request-ID"] == "trace-abc"
        assert response.json()["request_id"] == "trace-abc"

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_client_id(self, broken_client):
        response = await broken_client.get("/posts", headers={"X-Request-ID": "abc"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "abc"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "abc"
        assert "session is broken" not in body["message"]

    @pytest.mark.asyncio
    async def test_unexpected_error_gets_generated_id(self, broken_client):
        response = await broken_client.delete("/posts/1")

        assert response.status_code == 500
        assert len(response.headers["X-Request-ID"]) == 8
        assert response.json()["request_id"] == response.headers["X-Request-ID"]


class TestAccessLogLevel:

    @pytest.mark.parametrize(
        "status, level",
        [
            (200, logging.INFO),
            (204, logging.INFO),
            (404, logging.WARNING),
            (422, logging.WARNING),
            (500, logging.ERROR),
        ],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level


class TestSettings:

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test,")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_sqlite_gets_no_pool_options(self):
        assert "pool_size" not in _engine_options("sqlite+aiosqlite://")

    def test_server_database_gets_pool_options(self):
        options = _engine_options("postgresql+asyncpg://u:p@db:5432/posts")
        assert options["pool_size"] >= 5
        assert options["pool_recycle"] == 3600


class TestPackageDocs:

    @pytest.mark.parametrize(
        "package", ["posts_api.routes", "posts_api.middleware", "posts_api.services"]
    )
    def test_docstring_is_module_doc(self, package):
        module = importlib.import_module(package)

        assert module.__doc__ is not None
        assert module.__doc__.lstrip().startswith("Posts API:")
