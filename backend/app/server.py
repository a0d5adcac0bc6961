"""
Echo Server Backend: Process Entry Point
==========================================

What:  Binds the application to HOST:PORT with uvicorn.
Who:   The `echo-server` console script and `python -m app`.

    $ PORT=8080 echo-server
    ... [INFO] app.server: Server listening on port 8080
"""

import logging

import uvicorn

from app.config import settings
from app.main import setup_logging

logger = logging.getLogger(__name__)


def run() -> None:
    """Serve app.main:app until interrupted."""
    setup_logging()
    logger.info("Server listening on port %d", settings.port)
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        server_header=False,  # no "server: uvicorn" on responses
        log_config=None,  # keep the handlers installed by setup_logging()
    )
