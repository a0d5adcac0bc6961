"""
Echo Server Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by app.server.run() (or `uvicorn app.main:app`).
When:  Once at server startup; the returned app handles all subsequent requests.

Request chain (outermost first):
    Logging → CORS → Header removal → [Trailing slash] → Error handler
      → Body parser → Cookie parser → /api router → / router → 404 handler

Routes:
    GET /           {"status": true, "message": "Hello world, from /"}
    GET /api/echo   {"status": true, "message": "Hello world, from the API!"}
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.middleware.body_parsing import BodyParsingMiddleware
from app.middleware.cookies import CookieParsingMiddleware
from app.middleware.cors import CORSHeadersMiddleware
from app.middleware.errors import (
    ErrorHandlerMiddleware,
    internal_error_response,
    log_failure,
)
from app.middleware.headers import RemoveHeaderMiddleware, TrailingSlashMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.routes import api, root
from app.schemas.status import NOT_FOUND

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    uvicorn's own access log is raised to WARNING; RequestLoggingMiddleware
    already writes one line per request.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # Override any existing logging config
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging on startup and log the server's lifecycle."""
    setup_logging()
    logger.info("Echo server %s starting up", __version__)
    logger.info("Removing response headers: %s", ", ".join(settings.removed_headers_list) or "none")

    yield

    logger.info("Echo server shutting down")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the two terminal handlers.

    Handler mapping:
        404 / 405 from the router  → 404 {"status": false, "message": "Not found"}
        Exception (fallback)       → 500 {"status": false, "message": "Internal server error"}

    ErrorHandlerMiddleware catches failures inside the chain; the Exception
    handler here only sees failures raised by the outer middlewares.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """A GET-only path hit with another method counts as unmatched too."""
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=NOT_FOUND.model_dump())
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        log_failure(request, exc)
        return internal_error_response()


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    docs_enabled = settings.enable_docs
    app = FastAPI(
        title="Echo Server",
        description="Minimal HTTP server answering fixed JSON payloads.",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        redirect_slashes=False,  # "/api/echo/" is a 404, not a 307
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost).

    app.add_middleware(CookieParsingMiddleware)
    app.add_middleware(BodyParsingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.strip_trailing_slash:
        app.add_middleware(TrailingSlashMiddleware)

    for header in settings.removed_headers_list:
        app.add_middleware(RemoveHeaderMiddleware, header=header)

    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(api.router, prefix=api.API_PREFIX)
    app.include_router(root.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
