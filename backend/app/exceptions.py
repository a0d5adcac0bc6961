"""
Echo Server Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions raised while processing a request.
How:   Each exception class carries a message and optional context dict.
       The error handler (app.middleware.errors) catches everything, logs
       message and context server-side, and answers with a generic 500 body.

Exception Hierarchy:
    EchoServerError (base)
    └── BodyParseError   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class EchoServerError(Exception):
    """
    Base exception for all echo server errors.

    Attributes:
        message:  Human-readable error description (logged, never returned)
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BodyParseError(EchoServerError):
    """
    Raised when a request body cannot be parsed as its declared content type.

    When:    Invalid JSON, bytes that are not valid UTF-8, or a body that is
             already a structured object instead of raw text.
    HTTP:    500 Internal Server Error (same generic body as any other failure)
    """

    def __init__(
        self,
        message: str = "Request body could not be parsed",
        content_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if content_type:
            ctx["content_type"] = content_type
        super().__init__(message=message, context=ctx)
        self.content_type = content_type
