"""Tests for the in-memory and SQL song stores."""

import logging

import pytest

from song_server.app.core.db import ConnectionPool
from song_server.app.schemas.song import Song
from song_server.app.services.song_store import (
    SEED_SONGS,
    InMemorySongStore,
    SQLSongStore,
    StorageUnavailable,
)


class TestInMemorySongStore:
    """Tests for InMemorySongStore."""

    @pytest.mark.asyncio
    async def test_starts_with_seed_songs(self):
        store = InMemorySongStore()
        songs = await store.list()

        assert songs == SEED_SONGS
        assert [song.rank for song in songs] == [355, 356, 357]
        assert songs[0].artist == "Ke$ha"

    @pytest.mark.asyncio
    async def test_append_keeps_insertion_order(self):
        store = InMemorySongStore(songs=[])
        first = Song(artist="A", track="B", rank=1, published="1/1/2020")
        second = Song(artist="C", track="D", rank=2, published="2/2/2020")

        await store.append(first)
        await store.append(second)

        assert await store.list() == [first, second]

    @pytest.mark.asyncio
    async def test_list_returns_copy(self):
        store = InMemorySongStore()
        songs = await store.list()
        songs.clear()

        assert len(await store.list()) == 3

    @pytest.mark.asyncio
    async def test_stores_do_not_share_records(self):
        one = InMemorySongStore()
        other = InMemorySongStore()
        await one.append(Song(artist="Only here"))

        assert len(await one.list()) == 4
        assert len(await other.list()) == 3

    def test_not_persistent(self):
        assert InMemorySongStore.persistent is False


class TestSQLSongStore:
    """Tests for SQLSongStore."""

    @pytest.mark.asyncio
    async def test_setup_creates_and_seeds_table(self, sql_store):
        await sql_store.setup()

        assert await sql_store.list() == SEED_SONGS

    @pytest.mark.asyncio
    async def test_setup_twice_does_not_reseed(self, sql_store):
        await sql_store.setup()
        await sql_store.setup()

        assert len(await sql_store.list()) == 3

    @pytest.mark.asyncio
    async def test_append_then_list(self, sql_store):
        await sql_store.setup()
        song = Song(artist="A", track="B", rank=1, published="1/1/2020")

        await sql_store.append(song)

        songs = await sql_store.list()
        assert len(songs) == 4
        assert songs[-1] == song

    @pytest.mark.asyncio
    async def test_append_without_fields_stores_nulls(self, sql_store):
        await sql_store.setup()
        await sql_store.append(Song(artist="Nameless"))

        last = (await sql_store.list())[-1]
        assert last == Song(artist="Nameless", track=None, rank=None, published=None)

    @pytest.mark.asyncio
    async def test_sql_in_values_is_stored_literally(self, sql_store):
        await sql_store.setup()
        hostile = "Bobby'); DROP TABLE songs; --"

        await sql_store.append(Song(artist=hostile, track="x'; DELETE FROM songs; --", rank=1))

        songs = await sql_store.list()
        assert songs[:3] == SEED_SONGS
        assert songs[3].artist == hostile
        assert songs[3].track == "x'; DELETE FROM songs; --"

    @pytest.mark.asyncio
    async def test_records_survive_new_store(self, pool, sql_store):
        await sql_store.setup()
        await sql_store.append(Song(artist="Kept"))

        reopened = SQLSongStore(pool)
        await reopened.setup()

        assert (await reopened.list())[-1].artist == "Kept"

    @pytest.mark.asyncio
    async def test_custom_seed(self, pool):
        store = SQLSongStore(pool, seed=[])
        await store.setup()

        assert await store.list() == []

    def test_persistent(self):
        assert SQLSongStore.persistent is True


class TestStorageUnavailable:
    """SQL failures surface as StorageUnavailable and are logged."""

    @pytest.fixture
    def broken_store(self, tmp_path):
        pool = ConnectionPool(str(tmp_path / "missing" / "songs.db"), acquire_timeout=0.1)
        yield SQLSongStore(pool)
        pool.dispose()

    @pytest.mark.asyncio
    async def test_list_fails_on_connection_error(self, broken_store, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(StorageUnavailable):
                await broken_store.list()
        assert any("Failed to list songs" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_append_fails_on_connection_error(self, broken_store, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(StorageUnavailable):
                await broken_store.append(Song(artist="A"))
        assert any("Failed to create song" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_setup_fails_on_connection_error(self, broken_store):
        with pytest.raises(StorageUnavailable):
            await broken_store.setup()

    @pytest.mark.asyncio
    async def test_list_fails_without_table(self, sql_store):
        with pytest.raises(StorageUnavailable) as excinfo:
            await sql_store.list()
        assert excinfo.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_pool_exhaustion_is_storage_error(self, pool, sql_store):
        await sql_store.setup()
        with pool.connection(), pool.connection():
            with pytest.raises(StorageUnavailable):
                await sql_store.list()
