"""
Echo Server Backend: Header and Path Normalisation Middleware
===============================================================

What:  Small single-purpose rewrites of the request path or response headers.

    RemoveHeaderMiddleware    strips one named response header
    TrailingSlashMiddleware   "/api/echo/" → "/api/echo" before routing

One RemoveHeaderMiddleware is registered per header listed in
settings.removed_headers; the instances are independent of each other.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RemoveHeaderMiddleware(BaseHTTPMiddleware):
    """
    Removes a single response header, if present.

    Args:
        app:    The ASGI application to wrap.
        header: Header name, matched case-insensitively.
    """

    def __init__(self, app: ASGIApp, *, header: str) -> None:
        super().__init__(app)
        self.header = header

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        if self.header in response.headers:
            del response.headers[self.header]
        return response


class TrailingSlashMiddleware(BaseHTTPMiddleware):
    """Drops one trailing slash from the request path; "/" itself is left alone."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.scope["path"]
        if path.endswith("/") and len(path) > 1:
            request.scope["path"] = path[:-1]
            logger.debug("Rewrote path %s to %s", path, request.scope["path"])
        return await call_next(request)
