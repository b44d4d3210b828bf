"""
Album-related DB queries used by `discography.core.catalog_db.CatalogDb`.

Design:
- Functions are *pure DB helpers*: they take an open `aiosqlite.Connection`
  and return entities, counts, or nothing.
- Ordering comes from `discography.core.db.ordering`.
- These functions assume `conn.row_factory = aiosqlite.Row`.
"""

from __future__ import annotations

import uuid

import aiosqlite

from discography.core.db.ordering import ALBUMS_BY_RELEASE_YEAR, ALBUMS_BY_TITLE
from discography.core.db.rows import ALBUM_COLUMNS, row_to_album, select_list
from discography.core.models import Album

_SELECT = f"SELECT {select_list(ALBUM_COLUMNS)} FROM albums"


async def insert_album(
    conn: aiosqlite.Connection,
    album_id: uuid.UUID,
    title: str,
    release_year: int,
    artist_id: uuid.UUID,
) -> None:
    await conn.execute(
        "INSERT INTO albums (id, title, release_year, artist_id) VALUES (?, ?, ?, ?);",
        (str(album_id), title, int(release_year), str(artist_id)),
    )


async def get_album(conn: aiosqlite.Connection, album_id: uuid.UUID) -> Album | None:
    cursor = await conn.execute(f"{_SELECT} WHERE id = ?;", (str(album_id),))
    row = await cursor.fetchone()
    return row_to_album(row) if row else None


async def list_albums(conn: aiosqlite.Connection) -> list[Album]:
    cursor = await conn.execute(f"{_SELECT} {ALBUMS_BY_TITLE};")
    rows = await cursor.fetchall()
    return [row_to_album(r) for r in rows]


async def list_albums_by_artist(conn: aiosqlite.Connection, artist_id: uuid.UUID) -> list[Album]:
    cursor = await conn.execute(
        f"{_SELECT} WHERE artist_id = ? {ALBUMS_BY_RELEASE_YEAR};",
        (str(artist_id),),
    )
    rows = await cursor.fetchall()
    return [row_to_album(r) for r in rows]


async def update_album(
    conn: aiosqlite.Connection,
    album_id: uuid.UUID,
    title: str,
    release_year: int,
    artist_id: uuid.UUID,
) -> int:
    """Full replace of title/release_year/artist_id. Returns rows changed."""
    cursor = await conn.execute(
        "UPDATE albums SET title = ?, release_year = ?, artist_id = ? WHERE id = ?;",
        (title, int(release_year), str(artist_id), str(album_id)),
    )
    return cursor.rowcount


async def delete_album(conn: aiosqlite.Connection, album_id: uuid.UUID) -> int:
    cursor = await conn.execute("DELETE FROM albums WHERE id = ?;", (str(album_id),))
    return cursor.rowcount


async def album_has_tracks(conn: aiosqlite.Connection, album_id: uuid.UUID) -> bool:
    cursor = await conn.execute(
        "SELECT EXISTS(SELECT 1 FROM tracks WHERE album_id = ?) AS has_tracks;",
        (str(album_id),),
    )
    row = await cursor.fetchone()
    return bool(row["has_tracks"]) if row is not None else False
