"""
Request Context Middleware Tests.

WHAT: Unit tests for RequestContextMiddleware and the request-ID log filter.
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from songlib.core.logging import JSONFormatter, RequestIdFilter, setup_logging
from songlib.middleware.request_context import (
    REQUEST_ID_HEADER,
    RequestContext,
    RequestContextMiddleware,
    _request_context,
    get_request_context,
)


def _make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/context")
    async def context():
        ctx = get_request_context()
        return {"request_id": ctx.request_id, "path": ctx.path, "method": ctx.method}

    return app


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self):
        async with AsyncClient(transport=ASGITransport(app=_make_app()), base_url="http://test") as ac:
            response = await ac.get("/context")

        data = response.json()
        assert len(data["request_id"]) == 36
        assert response.headers[REQUEST_ID_HEADER] == data["request_id"]
        assert data["path"] == "/context"
        assert data["method"] == "GET"

    @pytest.mark.asyncio
    async def test_reuses_inbound_request_id(self):
        async with AsyncClient(transport=ASGITransport(app=_make_app()), base_url="http://test") as ac:
            response = await ac.get("/context", headers={REQUEST_ID_HEADER: "req-42"})

        assert response.json()["request_id"] == "req-42"
        assert response.headers[REQUEST_ID_HEADER] == "req-42"

    @pytest.mark.asyncio
    async def test_context_cleared_after_request(self):
        async with AsyncClient(transport=ASGITransport(app=_make_app()), base_url="http://test") as ac:
            await ac.get("/context")

        assert get_request_context() is None


class TestLogging:
    """Tests for the request-ID log filter and formatters."""

    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("songlib.test", logging.INFO, __file__, 1, "hello", None, None)

    def test_filter_outside_request(self):
        record = self._record()

        RequestIdFilter().filter(record)

        assert record.request_id == "-"

    def test_filter_inside_request(self):
        token = _request_context.set(RequestContext(request_id="abc", path="/", method="GET"))
        try:
            record = self._record()
            RequestIdFilter().filter(record)
        finally:
            _request_context.reset(token)

        assert record.request_id == "abc"

    def test_json_formatter_includes_extra_fields(self):
        import json

        record = self._record()
        record.request_id = "abc"
        record.song_id = 7

        payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "hello"
        assert payload["request_id"] == "abc"
        assert payload["song_id"] == 7

    def test_setup_logging_does_not_stack_handlers(self):
        root = logging.getLogger()
        first = setup_logging("DEBUG", "text")
        second = setup_logging("INFO", "json")

        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.INFO
