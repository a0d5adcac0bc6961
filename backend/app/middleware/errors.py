"""
Echo Server Backend: Error Handler Middleware
===============================================

What:  Catch-all for exceptions raised by any later stage of the chain.
How:   Wraps the downstream call in try/except; on failure, logs the full
       traceback and context server-side and answers with the generic
       500 body. The caller never sees exception details.
When:  Inside the logging, CORS and header-removal stages, so a 500 answer
       is still logged and still carries CORS headers.

Response:
    HTTP 500  {"status": false, "message": "Internal server error"}
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.schemas.status import INTERNAL_ERROR

logger = logging.getLogger(__name__)


def log_failure(request: Request, exc: Exception) -> None:
    """Log an unhandled exception with its traceback and any attached context."""
    logger.error(
        "Unhandled error on %s %s: %s | Context: %s",
        request.method,
        request.url.path,
        str(exc),
        getattr(exc, "context", {}),
        exc_info=exc,
    )


def internal_error_response() -> JSONResponse:
    return JSONResponse(status_code=500, content=INTERNAL_ERROR.model_dump())


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns any exception from downstream into a logged, generic 500 response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            log_failure(request, exc)
            return internal_error_response()
