"""Shared fixtures for Song Server tests."""

import pytest
from fastapi.testclient import TestClient

from song_server.app.core.config import Settings
from song_server.app.core.db import ConnectionPool
from song_server.app.main import create_app
from song_server.app.services.song_store import SQLSongStore


@pytest.fixture
def memory_settings():
    """Settings for an app using the in-memory store."""
    return Settings(storage="memory", serve_static=False)


@pytest.fixture
def sql_settings(tmp_path):
    """Settings for an app using a fresh SQLite file."""
    return Settings(
        storage="sql",
        database_url=str(tmp_path / "songs.db"),
        pool_max_connections=2,
        pool_acquire_timeout=1.0,
        serve_static=False,
    )


@pytest.fixture
def pool(tmp_path):
    """Connection pool on a temporary database, disposed after the test."""
    pool = ConnectionPool(str(tmp_path / "songs.db"), max_connections=2, acquire_timeout=0.2)
    yield pool
    pool.dispose()


@pytest.fixture
def sql_store(pool):
    """SQL song store on the temporary pool; setup is left to the test."""
    return SQLSongStore(pool)


@pytest.fixture
def memory_client(memory_settings):
    """Test client for an in-memory app with startup hooks run."""
    with TestClient(create_app(memory_settings)) as client:
        yield client


@pytest.fixture
def sql_client(sql_settings):
    """Test client for a SQL-backed app with the table created and seeded."""
    with TestClient(create_app(sql_settings)) as client:
        yield client
