"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
server starts with the in‑memory store and no further setup.  Set
``SONG_STORAGE=sql`` to keep songs in a SQLite table instead.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Song Server")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Which song store to use: ``memory`` keeps records in a list for the
    # lifetime of the process, ``sql`` stores them in the ``songs`` table.
    storage: str = os.getenv("SONG_STORAGE", "memory")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "songs.db")

    # Connection pool limits.  At most ``pool_max_connections`` are open
    # at once; a connection older than ``pool_idle_timeout`` seconds is
    # replaced on its next checkout.  Checkout waits at most
    # ``pool_acquire_timeout`` seconds for a free connection.
    pool_max_connections: int = int(os.getenv("POOL_MAX_CONNECTIONS", "10"))
    pool_idle_timeout: int = int(os.getenv("POOL_IDLE_TIMEOUT", "30"))
    pool_acquire_timeout: float = float(os.getenv("POOL_ACQUIRE_TIMEOUT", "30"))

    # Serve the browser client from ``app/public`` at ``/``.
    serve_static: bool = _env_flag("SERVE_STATIC", "true")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
