"""Entry point for the Bookkeeping API.

This script serves the FastAPI application with uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration is read from environment variables (see
``bookkeeping_api.app.core.config``): ``TRANSACTIONS_FILE`` selects
the JSON file mirroring the collection, ``HOST`` and ``PORT`` the
listening address and ``LOG_LEVEL`` the verbosity.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from bookkeeping_api.app.core.config import settings
from bookkeeping_api.app.main import app


async def run_api() -> None:
    """Start the API server using Uvicorn on ``settings.host:settings.port``."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Bookkeeping API running at http://%s:%s", settings.host, settings.port
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
