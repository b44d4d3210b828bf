"""
Artist-related DB queries used by `discography.core.catalog_db.CatalogDb`.

Design:
- Functions are *pure DB helpers*: they take an open `aiosqlite.Connection`
  and return entities, counts, or nothing.
- Ids are bound as canonical UUID text; callers pass parsed `uuid.UUID`s.
- These functions assume `conn.row_factory = aiosqlite.Row`.
- Commit/rollback is the caller's job (see `CatalogDb.connection`).
"""

from __future__ import annotations

import uuid

import aiosqlite

from discography.core.db.ordering import ARTISTS_BY_NAME
from discography.core.db.rows import ARTIST_COLUMNS, row_to_artist, select_list
from discography.core.models import Artist

_SELECT = f"SELECT {select_list(ARTIST_COLUMNS)} FROM artists"


async def insert_artist(
    conn: aiosqlite.Connection, artist_id: uuid.UUID, name: str, genre: str | None
) -> None:
    await conn.execute(
        "INSERT INTO artists (id, name, genre) VALUES (?, ?, ?);",
        (str(artist_id), name, genre),
    )


async def get_artist(conn: aiosqlite.Connection, artist_id: uuid.UUID) -> Artist | None:
    cursor = await conn.execute(f"{_SELECT} WHERE id = ?;", (str(artist_id),))
    row = await cursor.fetchone()
    return row_to_artist(row) if row else None


async def list_artists(conn: aiosqlite.Connection) -> list[Artist]:
    cursor = await conn.execute(f"{_SELECT} {ARTISTS_BY_NAME};")
    rows = await cursor.fetchall()
    return [row_to_artist(r) for r in rows]


async def update_artist(
    conn: aiosqlite.Connection, artist_id: uuid.UUID, name: str, genre: str | None
) -> int:
    """Full replace of name/genre. Returns the number of rows changed (0 or 1)."""
    cursor = await conn.execute(
        "UPDATE artists SET name = ?, genre = ? WHERE id = ?;",
        (name, genre, str(artist_id)),
    )
    return cursor.rowcount


async def delete_artist(conn: aiosqlite.Connection, artist_id: uuid.UUID) -> int:
    cursor = await conn.execute("DELETE FROM artists WHERE id = ?;", (str(artist_id),))
    return cursor.rowcount


async def artist_has_albums(conn: aiosqlite.Connection, artist_id: uuid.UUID) -> bool:
    cursor = await conn.execute(
        "SELECT EXISTS(SELECT 1 FROM albums WHERE artist_id = ?) AS has_albums;",
        (str(artist_id),),
    )
    row = await cursor.fetchone()
    return bool(row["has_albums"]) if row is not None else False
