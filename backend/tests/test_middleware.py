"""
Echo Server Backend: Middleware Tests
=======================================

What:  Tests for each request-processing stage, through the assembled app
       and through minimal apps that carry only the stage under test.
"""

import logging
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from httpx import AsyncClient, ASGITransport

from app.config import settings
from app.main import create_app
from app.middleware.headers import RemoveHeaderMiddleware

CORS_EXPECTED = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "*",
    "access-control-allow-headers": "*",
}


def _client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


def _app_with_framework_headers() -> FastAPI:
    app = create_app()

    @app.get("/powered")
    async def powered():
        return JSONResponse(
            {"ok": True},
            headers={"X-Powered-By": "FastAPI", "Server": "uvicorn", "ETag": '"abc"'},
        )

    return app


class TestCORSHeaders:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/", "/api/echo", "/missing"])
    async def test_wildcard_headers_present(self, test_client, path):
        response = await test_client.get(path)
        for name, value in CORS_EXPECTED.items():
            assert response.headers[name] == value

    @pytest.mark.asyncio
    async def test_present_on_internal_error(self, test_client):
        response = await test_client.request(
            "GET", "/", content=b"[", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_preflight_request(self, test_client):
        response = await test_client.options(
            "/api/echo",
            headers={"Origin": "http://elsewhere", "Access-Control-Request-Method": "GET"},
        )
        assert response.headers["access-control-allow-origin"] == "*"


class TestHeaderRemoval:

    @pytest.mark.asyncio
    async def test_configured_headers_removed(self):
        async with _client(_app_with_framework_headers()) as client:
            response = await client.get("/powered")
        assert response.status_code == 200
        assert "x-powered-by" not in response.headers
        assert "server" not in response.headers
        assert response.headers["etag"] == '"abc"'

    @pytest.mark.asyncio
    async def test_absent_on_every_route(self, test_client):
        for path in ("/", "/api/echo", "/missing"):
            response = await test_client.get(path)
            assert "x-powered-by" not in response.headers

    @pytest.mark.asyncio
    async def test_single_instance_removes_only_its_header(self):
        app = FastAPI()
        app.add_middleware(RemoveHeaderMiddleware, header="etag")

        @app.get("/")
        async def index():
            return JSONResponse({}, headers={"ETag": '"x"', "X-Powered-By": "FastAPI"})

        async with _client(app) as client:
            response = await client.get("/")
        assert "etag" not in response.headers
        assert response.headers["x-powered-by"] == "FastAPI"

    @pytest.mark.asyncio
    async def test_removed_headers_follow_settings(self):
        with patch.object(settings, "removed_headers", "ETag"):
            app = _app_with_framework_headers()
        async with _client(app) as client:
            response = await client.get("/powered")
        assert "etag" not in response.headers
        assert response.headers["x-powered-by"] == "FastAPI"


class TestTrailingSlash:

    @pytest.mark.asyncio
    async def test_disabled_by_default(self, test_client):
        response = await test_client.get("/api/echo/")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_enabled_strips_one_slash(self):
        with patch.object(settings, "strip_trailing_slash", True):
            app = create_app()
        async with _client(app) as client:
            stripped = await client.get("/api/echo/")
            root = await client.get("/")
        assert stripped.status_code == 200
        assert stripped.json()["message"] == "Hello world, from the API!"
        assert root.status_code == 200


class TestRequestLogging:

    @pytest.mark.asyncio
    async def test_logs_method_and_path(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="echo_server.access")
        await test_client.get("/api/echo")
        records = [r for r in caplog.records if r.name == "echo_server.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert records[0].getMessage().startswith("GET /api/echo 200 ")

    @pytest.mark.asyncio
    async def test_not_found_logged_as_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="echo_server.access")
        await test_client.delete("/gone")
        records = [r for r in caplog.records if r.name == "echo_server.access"]
        assert records[0].levelno == logging.WARNING
        assert "DELETE /gone 404" in records[0].getMessage()


class TestErrorHandler:

    @pytest.mark.asyncio
    async def test_failure_logged_with_traceback(self, app, test_client, caplog):
        @app.get("/explode")
        async def explode():
            raise RuntimeError("kaboom")

        caplog.set_level(logging.ERROR, logger="app.middleware.errors")
        response = await test_client.get("/explode")

        assert response.status_code == 500
        records = [r for r in caplog.records if r.name == "app.middleware.errors"]
        assert len(records) == 1
        assert "GET /explode" in records[0].getMessage()
        assert "kaboom" in records[0].getMessage()
        assert records[0].exc_info is not None

    @pytest.mark.asyncio
    async def test_parse_error_context_logged(self, test_client, caplog):
        caplog.set_level(logging.ERROR, logger="app.middleware.errors")
        await test_client.request(
            "GET", "/api/echo", content=b"{", headers={"Content-Type": "application/json"}
        )
        records = [r for r in caplog.records if r.name == "app.middleware.errors"]
        assert "application/json" in records[0].getMessage()


class TestBodyAndCookieParsing:

    @pytest.mark.asyncio
    async def test_json_body(self, probe_client):
        response = await probe_client.post("/probe", json={"a": [1, 2]})
        assert response.json()["outcome"] == "parsed"
        assert response.json()["format"] == "application/json"
        assert response.json()["data"] == {"a": [1, 2]}

    @pytest.mark.asyncio
    async def test_form_body(self, probe_client):
        response = await probe_client.post("/probe", data={"name": "echo", "n": "1"})
        assert response.json()["outcome"] == "parsed"
        assert response.json()["data"] == {"name": "echo", "n": "1"}

    @pytest.mark.asyncio
    async def test_unsupported_body(self, probe_client):
        response = await probe_client.post(
            "/probe", content=b"<xml/>", headers={"Content-Type": "application/xml"}
        )
        assert response.json()["outcome"] == "unsupported"
        assert response.json()["data"] == "<xml/>"

    @pytest.mark.asyncio
    async def test_no_content_type(self, probe_client):
        response = await probe_client.post("/probe")
        assert response.json()["outcome"] == "absent"
        assert response.json()["format"] is None

    @pytest.mark.asyncio
    async def test_malformed_json_is_500(self, probe_client):
        response = await probe_client.post(
            "/probe", content=b"{oops", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 500
        assert response.json() == {"status": False, "message": "Internal server error"}

    @pytest.mark.asyncio
    async def test_cookies_parsed(self, probe_client):
        response = await probe_client.post(
            "/probe", headers={"Cookie": "session=abc123; theme=dark"}
        )
        assert response.json()["cookies"] == {"session": "abc123", "theme": "dark"}

    @pytest.mark.asyncio
    async def test_cookie_values_decoded_and_first_wins(self, probe_client):
        response = await probe_client.post(
            "/probe", headers={"Cookie": "name=hello%20world; dup=first; dup=second"}
        )
        assert response.json()["cookies"] == {"name": "hello world", "dup": "first"}

    @pytest.mark.asyncio
    async def test_nested_form_body(self, probe_client):
        response = await probe_client.post(
            "/probe",
            content=b"k=1&k=2&a[b]=c",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.json()["data"] == {"k": ["1", "2"], "a": {"b": "c"}}

    @pytest.mark.asyncio
    async def test_missing_cookie_header(self, probe_client):
        response = await probe_client.post("/probe")
        assert response.json()["cookies"] == {}
