"""Root echo route: GET / (mounted without a prefix)."""

from app.routes.echo import echo_router

ROOT_MESSAGE = "Hello world, from /"

router = echo_router("/", ROOT_MESSAGE, tags=["Root"])
