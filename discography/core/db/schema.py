"""
Database schema for the catalog.

Design notes:
- We use SQLite `PRAGMA user_version` as the schema version.
- Foreign keys are declared `ON DELETE RESTRICT`: the services check for
  dependents before deleting, and the database refuses a delete that races
  with a concurrent child insert.
- Timestamps are stored as UTC text with millisecond precision so ordering
  ties between rows created in the same second stay rare.
"""

from __future__ import annotations

import logging
from typing import Final

import aiosqlite

from discography.core.db.rows import verify_columns

logger = logging.getLogger(__name__)

# Bump when the schema changes.
SCHEMA_VERSION: Final[int] = 1

_NOW: Final[str] = "(strftime('%Y-%m-%d %H:%M:%f', 'now'))"


async def ensure_schema(conn: aiosqlite.Connection) -> None:
    """
    Create the schema if needed, then verify the mapped columns.

    This function assumes:
    - `conn` is an open aiosqlite connection
    - `conn.row_factory` is `aiosqlite.Row`
    - foreign_keys pragma is enabled by the caller
    """
    cursor = await conn.execute("PRAGMA user_version;")
    row = await cursor.fetchone()
    current = int(row[0]) if row is not None else 0

    if current > SCHEMA_VERSION:
        raise RuntimeError(
            f"Database schema version {current} is newer than supported {SCHEMA_VERSION}."
        )

    if current < SCHEMA_VERSION:
        logger.info("Creating catalog schema (version %d -> %d)", current, SCHEMA_VERSION)
        await create_schema(conn)
        await conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION};")
        await conn.commit()

    await verify_columns(conn)


async def create_schema(conn: aiosqlite.Connection) -> None:
    await conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS artists (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            genre TEXT,
            created_at TEXT NOT NULL DEFAULT {_NOW}
        )
        """
    )
    await conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_artists_name ON artists(name COLLATE NOCASE);"
    )

    await conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS albums (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            release_year INTEGER NOT NULL CHECK (release_year >= 1900),
            artist_id TEXT NOT NULL REFERENCES artists(id) ON DELETE RESTRICT,
            created_at TEXT NOT NULL DEFAULT {_NOW}
        )
        """
    )
    await conn.execute("CREATE INDEX IF NOT EXISTS idx_albums_artist_id ON albums(artist_id);")
    await conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_albums_title ON albums(title COLLATE NOCASE);"
    )

    await conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS tracks (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            duration INTEGER NOT NULL CHECK (duration > 0),
            album_id TEXT NOT NULL REFERENCES albums(id) ON DELETE RESTRICT,
            created_at TEXT NOT NULL DEFAULT {_NOW}
        )
        """
    )
    await conn.execute("CREATE INDEX IF NOT EXISTS idx_tracks_album_id ON tracks(album_id);")
    await conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_tracks_title ON tracks(title COLLATE NOCASE);"
    )
