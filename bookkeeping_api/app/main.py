"""
Main entrypoint for the Bookkeeping API.

This module assembles the FastAPI application, sets up logging,
creates the shared transaction store and includes versioned routers.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``.  Importing the
app here makes it easy to run with uvicorn, e.g.::

    uvicorn bookkeeping_api.app.main:app --port 3000
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.store import DurableStore


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    The transaction file is loaded once by the startup event and the
    resulting :class:`DurableStore` is kept on ``app.state.store`` for the
    lifetime of the application.  Handlers obtain it through the
    dependencies in ``api.deps``.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module-level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger(__name__)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # The file is read when the app starts, not when it is created.
        store = DurableStore.open(settings.resolved_storage_path())
        app.state.store = store
        logger.info(
            "%s serving %d transactions from %s",
            settings.project_name,
            await store.count(),
            store.path,
        )

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        # Let an in-flight write finish so the file matches the last
        # acknowledged mutation.
        store: Optional[DurableStore] = getattr(app.state, "store", None)
        if store is not None:
            await store.wait_persisted()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
