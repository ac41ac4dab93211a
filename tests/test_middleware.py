import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from resume_assistant.middleware.error_handlers import (
    ExceptionHandlerMiddleware,
    PerformanceMiddleware,
    RequestLoggingMiddleware,
)
from resume_assistant.utils.exceptions import FileTooLargeError


@pytest.fixture
def test_app():
    app = FastAPI()
    app.add_middleware(ExceptionHandlerMiddleware)
    app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0)
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    @app.get("/too-large")
    async def too_large():
        raise FileTooLargeError("File size too large. Maximum size is 10MB.", size=11, limit=10)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    return app


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


class TestExceptionHandlerMiddleware:
    """Errors become the standard JSON envelope"""

    def test_success_is_tagged(self, client):
        response = client.get("/ok")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert response.headers["X-Request-ID"]
        assert float(response.headers["X-Processing-Time"]) >= 0

    def test_domain_error_envelope(self, client):
        response = client.get("/too-large")

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["status_code"] == 400
        assert data["request_id"] == response.headers["X-Request-ID"]
        assert data["error"] == "File size too large. Maximum size is 10MB."
        assert data["error_detail"]["error_code"] == "FILE_TOO_LARGE"
        assert data["error_detail"]["details"] == {"size": 11, "limit": 10}
        assert "timestamp" in data

    def test_unhandled_error_is_generic_500(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Internal server error"
        assert "database exploded" not in response.text
