"""Entry point for the Song Server.

Starts the FastAPI application under uvicorn.  Host, port and every
other option are read from environment variables (see
``song_server/app/core/config.py``), for example::

    SONG_STORAGE=sql PORT=8080 python run.py
"""
import asyncio

from uvicorn import Config, Server

from song_server.app.core.config import settings
from song_server.app.main import app


async def main() -> None:
    """Serve the application until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
