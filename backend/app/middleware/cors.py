"""
Echo Server Backend: CORS Headers Middleware
==============================================

What:  Grants every origin, method and header on every response.
How:   Sets the three Access-Control-Allow-* headers to "*" after the
       downstream stages have produced a response.

Starlette's CORSMiddleware only answers requests that carry an Origin header;
this one stamps the headers on all responses, 404 and 500 included.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "*",
    "Access-Control-Allow-Headers": "*",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Adds wildcard CORS headers to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
