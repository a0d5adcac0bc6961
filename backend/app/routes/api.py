"""API echo route: GET /echo, mounted under /api by the application."""

from app.routes.echo import echo_router

API_PREFIX = "/api"
API_MESSAGE = "Hello world, from the API!"

router = echo_router("/echo", API_MESSAGE, tags=["API"])
