"""
Tests for custom exception hierarchy.

WHAT: Verifies status codes, serialization, and the exception handlers.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from songlib.core.exceptions import (
    AppException,
    ValidationError,
    InvalidArgumentError,
    ResourceNotFoundError,
    SongNotFoundError,
    StorageError,
    ExternalServiceError,
    SongDetailsUnavailableError,
)
from songlib.core.exception_handlers import app_exception_handler, generic_exception_handler


class TestAppException:
    """Test base AppException class."""

    def test_default_message(self):
        exc = AppException()
        assert exc.message == "An unexpected error occurred"
        assert exc.status_code == 500

    def test_custom_status_code(self):
        exc = AppException(status_code=418)
        assert exc.status_code == 418

    def test_to_dict_basic(self):
        exc = AppException(message="Test error", song_id=123)
        result = exc.to_dict()

        assert result == {
            "error": "AppException",
            "message": "Test error",
            "status_code": 500,
            "details": {"song_id": 123},
        }

    def test_to_dict_filters_sensitive_data(self):
        exc = AppException(message="Test error", api_key="key123", password="x", group="Muse")
        details = exc.to_dict()["details"]

        assert "api_key" not in details
        assert "password" not in details
        assert details["group"] == "Muse"

    def test_to_dict_no_context(self):
        assert AppException(message="Test error").to_dict()["details"] is None


class TestSongExceptions:
    """Test the error kinds raised by the catalog."""

    def test_invalid_argument(self):
        exc = InvalidArgumentError("page", "0")

        assert isinstance(exc, ValidationError)
        assert exc.status_code == 400
        assert exc.message == "invalid page number"
        assert exc.to_dict()["details"] == {"parameter": "page", "value": "0"}

    def test_song_not_found(self):
        exc = SongNotFoundError(5)

        assert isinstance(exc, ResourceNotFoundError)
        assert exc.status_code == 404
        assert exc.message == "Song not found"
        assert exc.to_dict()["details"] == {"song_id": 5}

    def test_storage_error(self):
        exc = StorageError(operation="insert")

        assert exc.status_code == 500
        assert exc.context == {"operation": "insert"}

    def test_song_details_unavailable_defaults_to_bad_gateway(self):
        exc = SongDetailsUnavailableError()

        assert isinstance(exc, ExternalServiceError)
        assert exc.status_code == 502

    def test_song_details_unavailable_keeps_upstream_status(self):
        assert SongDetailsUnavailableError(status_code=404).status_code == 404


class TestExceptionHandlers:
    """Test exception handlers render the shared error shape."""

    @pytest.fixture
    def test_app(self):
        app = FastAPI()
        app.add_exception_handler(AppException, app_exception_handler)
        app.add_exception_handler(Exception, generic_exception_handler)

        @app.get("/not-found")
        async def not_found():
            raise SongNotFoundError(3)

        @app.get("/storage")
        async def storage():
            raise StorageError(message="Failed to list songs", operation="list")

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        return app

    def test_app_exception_handler(self, test_app):
        client = TestClient(test_app)

        response = client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {
            "error": "SongNotFoundError",
            "message": "Song not found",
            "status_code": 404,
            "details": {"song_id": 3},
        }

    def test_storage_error_handler(self, test_app):
        client = TestClient(test_app)

        response = client.get("/storage")

        assert response.status_code == 500
        assert response.json()["error"] == "StorageError"

    def test_generic_handler_hides_details(self, test_app):
        client = TestClient(test_app, raise_server_exceptions=False)

        response = client.get("/boom")

        assert response.status_code == 500
        assert "secret internals" not in response.text
        assert response.json()["error"] == "InternalServerError"
