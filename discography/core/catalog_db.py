"""
Catalog database access layer.

Goals:
- One explicitly constructed storage handle, injected into the services.
- SQLite + aiosqlite, async/await friendly, bounded connection pool.
- Fail fast: malformed ids never reach SQL, and a schema that does not match
  the row mappers is refused at startup.

This module is intentionally independent of the web layer.

Note:
- Entities live in `discography.core.models`
- Schema lives in `discography.core.db.schema`
- Query functions live in `discography.core.db.queries_*` modules
- `CatalogDb` is the public facade used by the rest of the codebase
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Awaitable, Iterable

import aiosqlite

from discography.core.db import queries_albums, queries_artists, queries_tracks
from discography.core.db.pool import ConnectionPool
from discography.core.db.schema import ensure_schema as ensure_schema_sql
from discography.core.errors import ConflictError, NotFoundError, StorageError
from discography.core.ids import new_id, parse_id
from discography.core.models import Album, Artist, Track

logger = logging.getLogger(__name__)


def _is_foreign_key_failure(exc: sqlite3.IntegrityError) -> bool:
    return "FOREIGN KEY" in str(exc).upper()


class CatalogDb:
    """
    Async access layer for the catalog DB.

    Usage:
        db = CatalogDb("catalog.sqlite3")
        await db.open()
        await db.ensure_schema()
        ... queries ...
        await db.close()

    Every method that takes an id accepts a `uuid.UUID` or canonical UUID
    text; anything else raises `InvalidIdError` before a connection is
    borrowed.
    """

    def __init__(
        self,
        db_path: str | Path,
        *,
        pool_size: int = 4,
        busy_timeout: float = 5.0,
    ) -> None:
        self._db_path = str(db_path)
        self._pool = ConnectionPool(self._db_path, size=pool_size, busy_timeout=busy_timeout)

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._pool.is_open

    @property
    def pool_size(self) -> int:
        return self._pool.size

    @property
    def available_connections(self) -> int:
        """Idle pooled connections; equals `pool_size` when nothing is borrowed."""
        return self._pool.available

    async def open(self) -> None:
        if self._pool.is_open:
            return
        try:
            await self._pool.open()
        except sqlite3.Error as exc:
            logger.error("Failed to open catalog database %s: %s", self._db_path, exc)
            raise StorageError(f"Cannot open database {self._db_path}") from exc
        logger.info("Catalog database opened: %s (pool size %d)", self._db_path, self._pool.size)

    async def close(self) -> None:
        if not self._pool.is_open:
            return
        await self._pool.close()
        logger.info("Catalog database closed: %s", self._db_path)

    def _require_open(self) -> None:
        if not self._pool.is_open:
            raise RuntimeError("CatalogDb is not open. Call await db.open() first.")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow one connection for one unit of work.

        Commits when the block exits normally, rolls back on any exception,
        and always hands the connection back to the pool. SQLite errors that
        escape the block are re-raised as StorageError (original chained);
        logging the failure is left to whoever handles it.
        """
        self._require_open()
        async with self._pool.acquire() as conn:
            try:
                yield conn
                await conn.commit()
            except sqlite3.Error as exc:
                await conn.rollback()
                raise StorageError(f"Database operation failed on {self._db_path}") from exc
            except BaseException:
                await conn.rollback()
                raise

    async def ensure_schema(self) -> None:
        """Create the schema if needed and verify the mapped columns."""
        async with self.connection() as conn:
            await ensure_schema_sql(conn)
        logger.debug("Catalog schema ready")

    # ===========================================================================
    # Artists
    # ===========================================================================

    async def insert_artist(self, name: str, genre: str | None) -> Artist:
        artist_id = new_id()
        async with self.connection() as conn:
            await queries_artists.insert_artist(conn, artist_id, name, genre)
            artist = await queries_artists.get_artist(conn, artist_id)
        if artist is None:
            raise StorageError(f"Artist {artist_id} vanished after insert")
        return artist

    async def get_artist(self, artist_id: uuid.UUID | str) -> Artist | None:
        key = parse_id(artist_id)
        async with self.connection() as conn:
            return await queries_artists.get_artist(conn, key)

    async def list_artists(self) -> list[Artist]:
        async with self.connection() as conn:
            return await queries_artists.list_artists(conn)

    async def update_artist(
        self, artist_id: uuid.UUID | str, name: str, genre: str | None
    ) -> Artist | None:
        key = parse_id(artist_id)
        async with self.connection() as conn:
            changed = await queries_artists.update_artist(conn, key, name, genre)
            if changed == 0:
                return None
            return await queries_artists.get_artist(conn, key)

    async def delete_artist(self, artist_id: uuid.UUID | str) -> bool:
        key = parse_id(artist_id)
        try:
            async with self.connection() as conn:
                removed = await self._delete_guarded(
                    queries_artists.delete_artist(conn, key),
                    f"Cannot delete artist {key}: it still has albums",
                )
        except ConflictError:
            logger.warning("Delete of artist %s rejected by foreign key", key)
            raise
        return removed > 0

    async def artist_has_albums(self, artist_id: uuid.UUID | str) -> bool:
        key = parse_id(artist_id)
        async with self.connection() as conn:
            return await queries_artists.artist_has_albums(conn, key)

    # ===========================================================================
    # Albums
    # ===========================================================================

    async def insert_album(
        self, title: str, release_year: int, artist_id: uuid.UUID | str
    ) -> Album:
        artist_key = parse_id(artist_id, "artistId")
        album_id = new_id()
        async with self.connection() as conn:
            try:
                await queries_albums.insert_album(conn, album_id, title, release_year, artist_key)
            except sqlite3.IntegrityError as exc:
                if _is_foreign_key_failure(exc):
                    raise NotFoundError("artist", artist_key) from exc
                raise
            album = await queries_albums.get_album(conn, album_id)
        if album is None:
            raise StorageError(f"Album {album_id} vanished after insert")
        return album

    async def get_album(self, album_id: uuid.UUID | str) -> Album | None:
        key = parse_id(album_id)
        async with self.connection() as conn:
            return await queries_albums.get_album(conn, key)

    async def list_albums(self) -> list[Album]:
        async with self.connection() as conn:
            return await queries_albums.list_albums(conn)

    async def list_albums_by_artist(self, artist_id: uuid.UUID | str) -> list[Album]:
        key = parse_id(artist_id, "artistId")
        async with self.connection() as conn:
            return await queries_albums.list_albums_by_artist(conn, key)

    async def update_album(
        self,
        album_id: uuid.UUID | str,
        title: str,
        release_year: int,
        artist_id: uuid.UUID | str,
    ) -> Album | None:
        key = parse_id(album_id)
        artist_key = parse_id(artist_id, "artistId")
        async with self.connection() as conn:
            try:
                changed = await queries_albums.update_album(
                    conn, key, title, release_year, artist_key
                )
            except sqlite3.IntegrityError as exc:
                if _is_foreign_key_failure(exc):
                    raise NotFoundError("artist", artist_key) from exc
                raise
            if changed == 0:
                return None
            return await queries_albums.get_album(conn, key)

    async def delete_album(self, album_id: uuid.UUID | str) -> bool:
        key = parse_id(album_id)
        try:
            async with self.connection() as conn:
                removed = await self._delete_guarded(
                    queries_albums.delete_album(conn, key),
                    f"Cannot delete album {key}: it still has tracks",
                )
        except ConflictError:
            logger.warning("Delete of album %s rejected by foreign key", key)
            raise
        return removed > 0

    async def album_has_tracks(self, album_id: uuid.UUID | str) -> bool:
        key = parse_id(album_id)
        async with self.connection() as conn:
            return await queries_albums.album_has_tracks(conn, key)

    # ===========================================================================
    # Tracks
    # ===========================================================================

    async def insert_track(self, title: str, duration: int, album_id: uuid.UUID | str) -> Track:
        album_key = parse_id(album_id, "albumId")
        track_id = new_id()
        async with self.connection() as conn:
            try:
                await queries_tracks.insert_track(conn, track_id, title, duration, album_key)
            except sqlite3.IntegrityError as exc:
                if _is_foreign_key_failure(exc):
                    raise NotFoundError("album", album_key) from exc
                raise
            track = await queries_tracks.get_track(conn, track_id)
        if track is None:
            raise StorageError(f"Track {track_id} vanished after insert")
        return track

    async def get_track(self, track_id: uuid.UUID | str) -> Track | None:
        key = parse_id(track_id)
        async with self.connection() as conn:
            return await queries_tracks.get_track(conn, key)

    async def list_tracks(self) -> list[Track]:
        async with self.connection() as conn:
            return await queries_tracks.list_tracks(conn)

    async def list_tracks_by_album(self, album_id: uuid.UUID | str) -> list[Track]:
        key = parse_id(album_id, "albumId")
        async with self.connection() as conn:
            return await queries_tracks.list_tracks_by_album(conn, key)

    async def list_tracks_by_albums(
        self, album_ids: Iterable[uuid.UUID | str]
    ) -> dict[uuid.UUID, list[Track]]:
        """Tracks of several albums in one round trip, keyed by album id."""
        keys = [parse_id(a, "albumId") for a in album_ids]
        if not keys:
            return {}
        async with self.connection() as conn:
            return await queries_tracks.list_tracks_by_albums(conn, keys)

    async def update_track(
        self,
        track_id: uuid.UUID | str,
        title: str,
        duration: int,
        album_id: uuid.UUID | str,
    ) -> Track | None:
        key = parse_id(track_id)
        album_key = parse_id(album_id, "albumId")
        async with self.connection() as conn:
            try:
                changed = await queries_tracks.update_track(conn, key, title, duration, album_key)
            except sqlite3.IntegrityError as exc:
                if _is_foreign_key_failure(exc):
                    raise NotFoundError("album", album_key) from exc
                raise
            if changed == 0:
                return None
            return await queries_tracks.get_track(conn, key)

    async def delete_track(self, track_id: uuid.UUID | str) -> bool:
        key = parse_id(track_id)
        async with self.connection() as conn:
            removed = await queries_tracks.delete_track(conn, key)
        return removed > 0

    # ===========================================================================
    # Helpers
    # ===========================================================================

    @staticmethod
    async def _delete_guarded(statement: Awaitable[int], conflict_message: str) -> int:
        try:
            return await statement
        except sqlite3.IntegrityError as exc:
            if _is_foreign_key_failure(exc):
                raise ConflictError(conflict_message) from exc
            raise
