"""
Main entrypoint for the Song Server.

This module assembles the FastAPI application: it sets up logging,
builds the song store selected by ``Settings.storage``, includes the
songs router and serves the browser client.  ``create_app`` builds and
configures the app, which is then instantiated at module import time
as ``app``, so it can be run with uvicorn directly::

    uvicorn song_server.app.main:app --reload

The store is created exactly once per application and kept on
``app.state``; request handlers receive it through a dependency.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import ConnectionPool
from .core.logging_config import setup_logging
from .services.song_store import (
    InMemorySongStore,
    SongStore,
    SQLSongStore,
    StorageUnavailable,
)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

logger = logging.getLogger(__name__)


def build_song_store(config: Settings) -> SongStore:
    """Create the store named by ``config.storage``.

    Raises ``ValueError`` for an unknown storage name so that a typo in
    ``SONG_STORAGE`` stops the server at startup.
    """
    storage = config.storage.lower()
    if storage == "memory":
        return InMemorySongStore()
    if storage == "sql":
        return SQLSongStore(ConnectionPool.from_settings(config))
    raise ValueError(f"Unknown song storage {config.storage!r}; expected 'memory' or 'sql'")


def create_app(config: Optional[Settings] = None, store: Optional[SongStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    store : Optional[SongStore]
        Pre‑built store.  When omitted one is built from ``config``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    # Configure logging first so that store construction can log.
    setup_logging(config.log_level, config.log_file)

    app = FastAPI(title=config.project_name, version=config.api_version)
    app.state.song_store = store or build_song_store(config)
    logger.info("Using %s", type(app.state.song_store).__name__)

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailable) -> Response:
        # The failure was logged where it happened; the client gets no detail.
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.on_event("startup")
    async def startup_event() -> None:
        await app.state.song_store.setup()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await app.state.song_store.close()

    app.include_router(api_router)

    # Mounted last so that API routes take precedence over static paths.
    if config.serve_static:
        app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
