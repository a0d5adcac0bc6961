"""
Echo Server Backend: Echo Route Factory
=========================================

What:  Builds a router with one GET route (HEAD answered too) that always
       returns the same message.
How:   echo_router() closes over the message and registers the handler on a
       fresh APIRouter. The mount prefix is chosen by the application.

    echo_router("/echo", "Hello world, from the API!")
    GET <prefix>/echo → 200 {"status": true, "message": "Hello world, from the API!"}
"""

from typing import List, Optional

from fastapi import APIRouter

from app.schemas.status import StatusResponse


def echo_router(path: str, message: str, tags: Optional[List[str]] = None) -> APIRouter:
    """
    Create a router serving a fixed echo payload at `path`.

    Args:
        path:    Route path relative to the router's mount prefix.
        message: Text returned in the "message" field.
        tags:    OpenAPI tags for the route.

    Returns:
        APIRouter with a single GET/HEAD route.
    """
    router = APIRouter(tags=tags or ["Echo"])
    payload = StatusResponse(status=True, message=message)

    async def echo() -> StatusResponse:
        """Return the fixed payload; the request is never inspected."""
        return payload

    router.add_api_route(
        path,
        echo,
        methods=["GET", "HEAD"],
        status_code=200,
        response_model=StatusResponse,
        summary=f"Echo: {message}",
        description="Returns a fixed JSON payload regardless of the request.",
    )
    return router
