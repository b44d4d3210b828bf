"""
Tests for discography.core.catalog_db and the db subpackage.

These tests verify:
- CatalogDb lifecycle and schema creation
- Startup column verification and schema version checks
- Identifier fail-fast before any SQL
- Connections return to the pool on every exit path
- ON DELETE RESTRICT and foreign-key failures map to Conflict / NotFound
- Listing order
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

import aiosqlite
import pytest

from discography.core.catalog_db import CatalogDb
from discography.core.db import SCHEMA_VERSION
from discography.core.db.pool import ConnectionPool
from discography.core.errors import ConflictError, InvalidIdError, NotFoundError, StorageError

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
async def db() -> CatalogDb:
    """Create an in-memory database for testing."""
    db = CatalogDb(":memory:")
    await db.open()
    await db.ensure_schema()
    yield db
    await db.close()


@pytest.fixture
async def file_db(tmp_path: Path) -> CatalogDb:
    """Create a file-backed database with more than one pooled connection."""
    db = CatalogDb(tmp_path / "catalog.sqlite3", pool_size=3)
    await db.open()
    await db.ensure_schema()
    yield db
    await db.close()


# =============================================================================
# Lifecycle / schema
# =============================================================================


class TestLifecycle:
    """Tests for open/close and schema handling."""

    async def test_open_close(self) -> None:
        """Test basic open/close lifecycle."""
        db = CatalogDb(":memory:")
        assert not db.is_open

        await db.open()
        assert db.is_open

        await db.close()
        assert not db.is_open

    async def test_open_and_close_are_idempotent(self) -> None:
        """Test that repeated open/close calls are harmless."""
        db = CatalogDb(":memory:")
        await db.open()
        await db.open()
        await db.close()
        await db.close()
        assert not db.is_open

    async def test_memory_db_forces_single_connection(self) -> None:
        """Test that :memory: databases share one connection."""
        db = CatalogDb(":memory:", pool_size=8)
        assert db.pool_size == 1

    async def test_queries_require_open(self) -> None:
        """Test that querying a closed database raises."""
        db = CatalogDb(":memory:")
        with pytest.raises(RuntimeError, match="not open"):
            await db.list_artists()

    async def test_ensure_schema_is_repeatable(self, db: CatalogDb) -> None:
        """Test that ensure_schema can run against an existing schema."""
        await db.ensure_schema()
        assert await db.list_artists() == []

    async def test_schema_version_recorded(self, db: CatalogDb) -> None:
        async with db.connection() as conn:
            cursor = await conn.execute("PRAGMA user_version;")
            row = await cursor.fetchone()
        assert row[0] == SCHEMA_VERSION

    async def test_foreign_keys_enabled(self, db: CatalogDb) -> None:
        """Test that every pooled connection enforces foreign keys."""
        async with db.connection() as conn:
            cursor = await conn.execute("PRAGMA foreign_keys;")
            row = await cursor.fetchone()
        assert row[0] == 1

    async def test_newer_schema_is_refused(self, tmp_path: Path) -> None:
        """Test that a database from a newer release is not touched."""
        path = tmp_path / "future.sqlite3"
        async with aiosqlite.connect(path) as conn:
            await conn.execute("PRAGMA user_version = 99;")
            await conn.commit()

        db = CatalogDb(path)
        await db.open()
        try:
            with pytest.raises(RuntimeError, match="newer"):
                await db.ensure_schema()
        finally:
            await db.close()

    async def test_missing_column_fails_fast(self, tmp_path: Path) -> None:
        """A table lacking a mapped column is refused at startup."""
        path = tmp_path / "legacy.sqlite3"
        async with aiosqlite.connect(path) as conn:
            await conn.execute("CREATE TABLE artists (id TEXT PRIMARY KEY, name TEXT, created_at TEXT)")
            await conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION};")
            await conn.commit()

        db = CatalogDb(path)
        await db.open()
        try:
            with pytest.raises(StorageError, match="genre"):
                await db.ensure_schema()
        finally:
            await db.close()


# =============================================================================
# Connection handling
# =============================================================================


class TestConnections:
    """Tests for pooled connection handling."""

    async def test_pool_rejects_zero_size(self) -> None:
        with pytest.raises(ValueError):
            ConnectionPool("x.db", size=0)

    async def test_connection_returned_after_error(self, db: CatalogDb) -> None:
        """Test that an exception inside the block still returns the connection."""
        assert db.available_connections == db.pool_size

        with pytest.raises(KeyError):
            async with db.connection():
                assert db.available_connections == db.pool_size - 1
                raise KeyError("boom")

        assert db.available_connections == db.pool_size

    async def test_sqlite_error_becomes_storage_error(self, db: CatalogDb) -> None:
        """Test that sqlite3 errors surface as a chained StorageError."""
        with pytest.raises(StorageError) as excinfo:
            async with db.connection() as conn:
                await conn.execute("SELECT * FROM no_such_table;")
        assert excinfo.value.__cause__ is not None
        assert db.available_connections == db.pool_size

    async def test_storage_error_is_not_logged_here(
        self, db: CatalogDb, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that the failure is raised, not logged, by the storage layer."""
        with caplog.at_level(logging.DEBUG, logger="discography.core"):
            with pytest.raises(StorageError):
                async with db.connection() as conn:
                    await conn.execute("SELECT * FROM no_such_table;")
        assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []

    async def test_failed_unit_is_rolled_back(self, db: CatalogDb) -> None:
        """Test that a unit of work aborted by an exception leaves no rows."""
        with pytest.raises(KeyError):
            async with db.connection() as conn:
                await conn.execute(
                    "INSERT INTO artists (id, name) VALUES (?, ?);", (str(uuid.uuid4()), "Ghost")
                )
                raise KeyError("abort")
        assert await db.list_artists() == []

    async def test_invalid_id_never_borrows(self, db: CatalogDb) -> None:
        """Test that malformed ids fail before a connection is borrowed."""
        with pytest.raises(InvalidIdError):
            await db.get_artist("not-a-uuid")
        with pytest.raises(InvalidIdError):
            await db.delete_album("123")
        with pytest.raises(InvalidIdError):
            await db.list_tracks_by_albums([uuid.uuid4(), "bad"])
        assert db.available_connections == db.pool_size

    async def test_file_db_shares_data_across_connections(self, file_db: CatalogDb) -> None:
        """Test that every pooled connection sees committed rows."""
        assert file_db.pool_size == 3
        created = await file_db.insert_artist("Portishead", "Trip Hop")
        for _ in range(file_db.pool_size + 1):
            assert await file_db.get_artist(created.id) == created


# =============================================================================
# Artists
# =============================================================================


class TestArtists:
    """Tests for artist statements."""

    async def test_insert_and_get(self, db: CatalogDb) -> None:
        """Test that an inserted artist reads back identically by UUID or text."""
        artist = await db.insert_artist("Radiohead", "Alternative Rock")
        assert artist.id.version == 4
        assert artist.name == "Radiohead"
        assert artist.genre == "Alternative Rock"
        assert artist.created_at is not None

        assert await db.get_artist(artist.id) == artist
        assert await db.get_artist(str(artist.id)) == artist

    async def test_null_genre(self, db: CatalogDb) -> None:
        artist = await db.insert_artist("Björk", None)
        fetched = await db.get_artist(artist.id)
        assert fetched is not None
        assert fetched.genre is None

    async def test_get_missing(self, db: CatalogDb) -> None:
        assert await db.get_artist(uuid.uuid4()) is None

    async def test_list_is_case_insensitive_by_name(self, db: CatalogDb) -> None:
        """Test that artists are listed by name, ignoring case."""
        for name in ("beta", "Charlie", "alpha"):
            await db.insert_artist(name, None)
        assert [a.name for a in await db.list_artists()] == ["alpha", "beta", "Charlie"]

    async def test_update(self, db: CatalogDb) -> None:
        """Test that update replaces name and genre but keeps created_at."""
        artist = await db.insert_artist("Radiohed", "Rock")
        updated = await db.update_artist(artist.id, "Radiohead", None)
        assert updated is not None
        assert updated.name == "Radiohead"
        assert updated.genre is None
        assert updated.created_at == artist.created_at

    async def test_update_missing(self, db: CatalogDb) -> None:
        assert await db.update_artist(uuid.uuid4(), "X", None) is None

    async def test_delete(self, db: CatalogDb) -> None:
        """Test that delete reports whether a row was removed."""
        artist = await db.insert_artist("Temp", None)
        assert await db.delete_artist(artist.id) is True
        assert await db.delete_artist(artist.id) is False
        assert await db.get_artist(artist.id) is None

    async def test_artist_has_albums(self, db: CatalogDb) -> None:
        """Test the dependent-album existence check."""
        artist = await db.insert_artist("Radiohead", None)
        assert await db.artist_has_albums(artist.id) is False
        await db.insert_album("OK Computer", 1997, artist.id)
        assert await db.artist_has_albums(artist.id) is True


# =============================================================================
# Albums / tracks
# =============================================================================


class TestAlbumsAndTracks:
    """Tests for album and track statements."""

    @pytest.fixture
    async def artist_id(self, db: CatalogDb) -> uuid.UUID:
        return (await db.insert_artist("Radiohead", "Alternative Rock")).id

    async def test_insert_album_unknown_artist(self, db: CatalogDb) -> None:
        """Test that a dangling artist reference becomes NotFoundError."""
        with pytest.raises(NotFoundError) as excinfo:
            await db.insert_album("Orphan", 2000, uuid.uuid4())
        assert excinfo.value.resource == "artist"
        assert await db.list_albums() == []

    async def test_albums_by_artist_ordered_by_year(
        self, db: CatalogDb, artist_id: uuid.UUID
    ) -> None:
        """Test album ordering per artist (year) and overall (title)."""
        await db.insert_album("OK Computer", 1997, artist_id)
        await db.insert_album("Pablo Honey", 1993, artist_id)
        await db.insert_album("Kid A", 2000, artist_id)
        await db.insert_album("Amnesiac", 2001, artist_id)

        by_year = await db.list_albums_by_artist(artist_id)
        assert [a.release_year for a in by_year] == [1993, 1997, 2000, 2001]

        by_title = await db.list_albums()
        assert [a.title for a in by_title] == ["Amnesiac", "Kid A", "OK Computer", "Pablo Honey"]

    async def test_albums_by_unknown_artist_is_empty(self, db: CatalogDb) -> None:
        assert await db.list_albums_by_artist(uuid.uuid4()) == []

    async def test_update_album_unknown_artist(
        self, db: CatalogDb, artist_id: uuid.UUID
    ) -> None:
        """Test that moving an album to a missing artist changes nothing."""
        album = await db.insert_album("OK Computer", 1997, artist_id)
        with pytest.raises(NotFoundError):
            await db.update_album(album.id, "OK Computer", 1997, uuid.uuid4())
        assert await db.get_album(album.id) == album

    async def test_delete_restricted_by_foreign_key(
        self, db: CatalogDb, artist_id: uuid.UUID
    ) -> None:
        """The database itself refuses to orphan children."""
        album = await db.insert_album("OK Computer", 1997, artist_id)
        await db.insert_track("Airbag", 284, album.id)

        with pytest.raises(ConflictError):
            await db.delete_artist(artist_id)
        with pytest.raises(ConflictError):
            await db.delete_album(album.id)

        assert await db.get_artist(artist_id) is not None
        assert await db.get_album(album.id) is not None
        assert db.available_connections == db.pool_size

    async def test_insert_track_unknown_album(self, db: CatalogDb) -> None:
        """Test that a dangling album reference becomes NotFoundError."""
        with pytest.raises(NotFoundError) as excinfo:
            await db.insert_track("Lost", 100, uuid.uuid4())
        assert excinfo.value.resource == "album"
        assert await db.list_tracks() == []

    async def test_tracks_by_albums_batched(self, db: CatalogDb, artist_id: uuid.UUID) -> None:
        """Test that one batched query groups tracks by album."""
        ok = await db.insert_album("OK Computer", 1997, artist_id)
        kid = await db.insert_album("Kid A", 2000, artist_id)
        empty = await db.insert_album("Hail to the Thief", 2003, artist_id)
        await db.insert_track("Paranoid Android", 383, ok.id)
        await db.insert_track("Airbag", 284, ok.id)
        await db.insert_track("Idioteque", 309, kid.id)

        grouped = await db.list_tracks_by_albums([ok.id, kid.id, empty.id])
        assert set(grouped) == {ok.id, kid.id, empty.id}
        assert [t.title for t in grouped[ok.id]] == ["Airbag", "Paranoid Android"]
        assert [t.title for t in grouped[kid.id]] == ["Idioteque"]
        assert grouped[empty.id] == []

    async def test_tracks_by_albums_empty_input(self, db: CatalogDb) -> None:
        assert await db.list_tracks_by_albums([]) == {}

    async def test_track_update_and_delete(self, db: CatalogDb, artist_id: uuid.UUID) -> None:
        album = await db.insert_album("OK Computer", 1997, artist_id)
        track = await db.insert_track("Airbag", 280, album.id)

        updated = await db.update_track(track.id, "Airbag", 284, album.id)
        assert updated is not None
        assert updated.duration == 284
        assert await db.list_tracks_by_album(album.id) == [updated]

        assert await db.delete_track(track.id) is True
        assert await db.delete_track(track.id) is False
        assert await db.update_track(track.id, "Airbag", 284, album.id) is None
