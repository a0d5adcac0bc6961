"""
Echo Server Backend: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures (function-scoped):
    ├── app:          Fresh FastAPI instance from create_app()
    ├── test_client:  HTTPX AsyncClient talking to `app` in-process
    └── probe_app:    Bare FastAPI app with only the parsing middleware and a
                      route that reports what the middleware attached
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["REMOVED_HEADERS"] = "X-Powered-By,Server"
os.environ["STRIP_TRAILING_SLASH"] = "false"
os.environ["ENABLE_DOCS"] = "false"

import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from httpx import AsyncClient, ASGITransport

from app.main import create_app
from app.middleware.body_parsing import BodyParsingMiddleware
from app.middleware.cookies import CookieParsingMiddleware
from app.middleware.errors import ErrorHandlerMiddleware


@pytest.fixture
def app() -> FastAPI:
    """A fresh application; tests may add extra routes to it."""
    return create_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    # Exceptions are answered by the error handler; don't re-raise them here.
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def probe_app() -> FastAPI:
    """
    Minimal app exposing what the parsing middleware attached to the request.

    POST /probe → {"outcome": ..., "format": ..., "data": ..., "cookies": {...}}
    """
    probe = FastAPI()
    probe.add_middleware(CookieParsingMiddleware)
    probe.add_middleware(BodyParsingMiddleware)
    probe.add_middleware(ErrorHandlerMiddleware)

    @probe.post("/probe")
    async def report(request: Request):
        body = request.state.body
        data = body.data
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return {
            "outcome": body.outcome.value,
            "format": body.format.value if body.format else None,
            "data": data,
            "cookies": request.state.cookies,
        }

    return probe


@pytest_asyncio.fixture
async def probe_client(probe_app):
    transport = ASGITransport(app=probe_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
