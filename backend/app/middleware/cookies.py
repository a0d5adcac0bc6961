"""Cookie parsing middleware: exposes the Cookie header as request.state.cookies."""

from typing import Dict
from urllib.parse import unquote

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def parse_cookie_header(header: str) -> Dict[str, str]:
    """
    Parse "a=1; b=hello%20world" into {"a": "1", "b": "hello world"}.

    Values are percent-decoded and stripped of surrounding double quotes.
    A repeated name keeps its first value; pairs without "=" are skipped.
    """
    cookies: Dict[str, str] = {}
    for chunk in header.split(";"):
        name, sep, value = chunk.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies.setdefault(name, unquote(value))
    return cookies


class CookieParsingMiddleware(BaseHTTPMiddleware):
    """
    Attaches the parsed Cookie header to request.state.cookies.

    A request without a Cookie header gets an empty dict.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.cookies = parse_cookie_header(request.headers.get("cookie", ""))
        return await call_next(request)
