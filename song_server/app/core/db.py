"""
SQLite connection pool.

This module provides ``ConnectionPool``, a small wrapper around
SQLAlchemy's ``QueuePool`` that hands out plain ``sqlite3``
connections.  Callers use ``connection()`` as a context manager and
issue parameterized SQL through a regular DB‑API cursor; the pool
commits on success, rolls back on error and returns the connection for
reuse.  Acquire and release are logged at DEBUG level together with
the number of connections currently checked out.

The pool is bounded: at most ``max_connections`` connections exist at
any time and a caller asking for one more waits up to
``acquire_timeout`` seconds before SQLAlchemy raises ``TimeoutError``.
Connections older than ``idle_timeout`` seconds are closed and
replaced on their next checkout.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy.pool import QueuePool

from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are returned unchanged.  Relative paths are resolved
    against the ``song_server`` package root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # song_server/
    return str((base_dir / database_url).resolve())


class ConnectionPool:
    """Bounded pool of SQLite connections."""

    def __init__(
        self,
        database_path: str,
        max_connections: int = 10,
        idle_timeout: int = 30,
        acquire_timeout: float = 30.0,
    ) -> None:
        self.database_path = database_path
        self.max_connections = max_connections
        self._pool = QueuePool(
            self._connect,
            pool_size=max_connections,
            max_overflow=0,
            timeout=acquire_timeout,
            recycle=idle_timeout,
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ConnectionPool":
        """Build a pool from application settings."""
        config = config or default_settings
        return cls(
            get_database_path(config.database_url),
            max_connections=config.pool_max_connections,
            idle_timeout=config.pool_idle_timeout,
            acquire_timeout=config.pool_acquire_timeout,
        )

    def _connect(self) -> sqlite3.Connection:
        # Pooled connections may be checked out from any worker thread.
        conn = sqlite3.connect(self.database_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        logger.debug("Opened new connection to %s", self.database_path)
        return conn

    def checked_out(self) -> int:
        """Return the number of connections currently in use."""
        return self._pool.checkedout()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Acquire a connection for the duration of the ``with`` block.

        The transaction is committed when the block exits normally and
        rolled back when it raises.  Errors from acquisition or from the
        block propagate to the caller unchanged.
        """
        conn = self._pool.connect()
        logger.debug("Acquired connection (%d checked out)", self.checked_out())
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
            logger.debug("Released connection (%d checked out)", self.checked_out())

    def dispose(self) -> None:
        """Close all idle connections held by the pool."""
        self._pool.dispose()
        logger.info("Connection pool for %s disposed", self.database_path)
