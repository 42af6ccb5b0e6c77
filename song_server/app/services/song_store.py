"""
Song storage backends.

Two interchangeable stores keep the song list:

* ``InMemorySongStore`` holds records in a Python list for the life of
  the process.  It starts with three seed songs and never fails.
* ``SQLSongStore`` keeps records in the ``songs`` table and reaches the
  database through a shared ``ConnectionPool``.  Any connection, pool
  or query error is logged and re‑raised as ``StorageUnavailable``.

All SQL uses parameterized statements; field values are never
interpolated into statement text.  The table's ``id`` column orders
rows and is never returned to clients.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from song_server.app.core.db import ConnectionPool
from song_server.app.schemas.song import Song

logger = logging.getLogger(__name__)

SEED_SONGS: List[Song] = [
    Song(rank=355, artist="Ke$ha", track="Tik-Toc", published="1/1/2009"),
    Song(rank=356, artist="Gene Autry", track="Rudolph, the Red-Nosed Reindeer", published="1/1/1949"),
    Song(rank=357, artist="Oasis", track="Wonderwall", published="1/1/1996"),
]

# Errors that mean the backing store could not be read or written.
STORAGE_ERRORS = (sqlite3.Error, SQLAlchemyError)


class StorageUnavailable(Exception):
    """Raised when the song store cannot be read or written."""


class SongStore:
    """Interface shared by all song stores.

    ``persistent`` tells the API layer whether records survive a
    restart; it answers a successful create with 201 when they do and
    with 200 otherwise.
    """

    persistent: bool = False

    async def list(self) -> List[Song]:
        raise NotImplementedError

    async def append(self, song: Song) -> None:
        raise NotImplementedError

    async def setup(self) -> None:
        """Prepare the store at application startup."""

    async def close(self) -> None:
        """Release resources at application shutdown."""


class InMemorySongStore(SongStore):
    """Song store backed by a list.

    Appends are not synchronized.  Handlers run on a single event loop,
    but the store gives no atomicity guarantee under true parallel
    access.
    """

    def __init__(self, songs: Optional[Iterable[Song]] = None) -> None:
        initial = SEED_SONGS if songs is None else songs
        self._songs: List[Song] = [song.model_copy() for song in initial]

    async def list(self) -> List[Song]:
        """Return every song in insertion order."""
        return list(self._songs)

    async def append(self, song: Song) -> None:
        self._songs.append(song)
        logger.info("Stored song %r by %r in memory", song.track, song.artist)


class SQLSongStore(SongStore):
    """Song store backed by the ``songs`` table."""

    persistent = True

    def __init__(self, pool: ConnectionPool, seed: Optional[Iterable[Song]] = None) -> None:
        self.pool = pool
        self.seed = list(SEED_SONGS if seed is None else seed)

    async def setup(self) -> None:
        """Create the ``songs`` table and seed it when empty."""
        try:
            with self.pool.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS songs (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        artist VARCHAR(80),
                        track VARCHAR(120),
                        published TEXT,
                        rank INTEGER
                    )
                    """
                )
                row = cursor.execute("SELECT COUNT(*) AS total FROM songs").fetchone()
                if row["total"] == 0 and self.seed:
                    cursor.executemany(
                        "INSERT INTO songs (artist, track, rank, published) VALUES (?, ?, ?, ?)",
                        [self._song_params(song) for song in self.seed],
                    )
                    logger.info("Seeded songs table with %d records", len(self.seed))
        except STORAGE_ERRORS as e:
            logger.error("Failed to prepare songs table: %s", e)
            raise StorageUnavailable("songs table could not be prepared") from e

    async def list(self) -> List[Song]:
        """Return every stored song, oldest first."""
        try:
            with self.pool.connection() as conn:
                rows = conn.cursor().execute(
                    "SELECT artist, track, rank, published FROM songs ORDER BY id"
                ).fetchall()
        except STORAGE_ERRORS as e:
            logger.error("Failed to list songs: %s", e)
            raise StorageUnavailable("songs could not be read") from e
        return [self._row_to_song(row) for row in rows]

    async def append(self, song: Song) -> None:
        """Insert one song.  No field is checked before the write."""
        try:
            with self.pool.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "INSERT INTO songs (artist, track, rank, published) VALUES (?, ?, ?, ?)",
                    self._song_params(song),
                )
                logger.info("Created song %s", cursor.lastrowid)
        except STORAGE_ERRORS as e:
            logger.error("Failed to create song: %s", e)
            raise StorageUnavailable("song could not be written") from e

    async def close(self) -> None:
        self.pool.dispose()

    @staticmethod
    def _song_params(song: Song) -> tuple:
        return (song.artist, song.track, song.rank, song.published)

    @staticmethod
    def _row_to_song(row: sqlite3.Row) -> Song:
        return Song(
            artist=row["artist"],
            track=row["track"],
            rank=row["rank"],
            published=row["published"],
        )
