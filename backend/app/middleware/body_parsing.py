"""
Echo Server Backend: Body Parsing Middleware
==============================================

What:  Parses JSON and url-encoded request bodies before routing.
How:   Reads the full body, hands it to app.services.body_parsers.parse_body()
       and stores the ParsedBody on request.state.body.
When:  After the error handler, so a malformed body becomes a 500 response.

Handlers read the result as:
    request.state.body.outcome   ABSENT / PARSED / UNSUPPORTED
    request.state.body.data      parsed value, or the raw bytes
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.services.body_parsers import parse_body


class BodyParsingMiddleware(BaseHTTPMiddleware):
    """Attaches the parsed request body to request.state.body."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        raw = await request.body()
        request.state.body = parse_body(request.headers.get("content-type"), raw)
        return await call_next(request)
