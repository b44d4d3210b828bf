"""
Track-related DB queries used by `discography.core.catalog_db.CatalogDb`.

Design:
- Functions are *pure DB helpers*: they take an open `aiosqlite.Connection`
  and return entities, counts, or nothing.
- These functions assume `conn.row_factory = aiosqlite.Row`.

Important:
- Do NOT interpolate user input into SQL. The only dynamic SQL here is the
  `IN (?, ?, ...)` placeholder list in `list_tracks_by_albums`, whose length
  is derived from the number of ids, never from their values.
"""

from __future__ import annotations

import uuid
from typing import Sequence

import aiosqlite

from discography.core.db.ordering import TRACKS_BY_TITLE
from discography.core.db.rows import TRACK_COLUMNS, row_to_track, select_list
from discography.core.models import Track

_SELECT = f"SELECT {select_list(TRACK_COLUMNS)} FROM tracks"

# SQLite's default SQLITE_MAX_VARIABLE_NUMBER is 32766 on modern builds;
# stay far below it.
_IN_CHUNK = 500


async def insert_track(
    conn: aiosqlite.Connection,
    track_id: uuid.UUID,
    title: str,
    duration: int,
    album_id: uuid.UUID,
) -> None:
    await conn.execute(
        "INSERT INTO tracks (id, title, duration, album_id) VALUES (?, ?, ?, ?);",
        (str(track_id), title, int(duration), str(album_id)),
    )


async def get_track(conn: aiosqlite.Connection, track_id: uuid.UUID) -> Track | None:
    cursor = await conn.execute(f"{_SELECT} WHERE id = ?;", (str(track_id),))
    row = await cursor.fetchone()
    return row_to_track(row) if row else None


async def list_tracks(conn: aiosqlite.Connection) -> list[Track]:
    cursor = await conn.execute(f"{_SELECT} {TRACKS_BY_TITLE};")
    rows = await cursor.fetchall()
    return [row_to_track(r) for r in rows]


async def list_tracks_by_album(conn: aiosqlite.Connection, album_id: uuid.UUID) -> list[Track]:
    cursor = await conn.execute(
        f"{_SELECT} WHERE album_id = ? {TRACKS_BY_TITLE};",
        (str(album_id),),
    )
    rows = await cursor.fetchall()
    return [row_to_track(r) for r in rows]


async def list_tracks_by_albums(
    conn: aiosqlite.Connection, album_ids: Sequence[uuid.UUID]
) -> dict[uuid.UUID, list[Track]]:
    """
    Fetch the tracks of several albums at once, grouped by album id.

    Every requested album id is present in the result (possibly with an empty
    list); each list is ordered by title.
    """
    grouped: dict[uuid.UUID, list[Track]] = {album_id: [] for album_id in album_ids}
    keys = [str(a) for a in grouped]
    for start in range(0, len(keys), _IN_CHUNK):
        chunk = keys[start : start + _IN_CHUNK]
        placeholders = ", ".join("?" for _ in chunk)
        cursor = await conn.execute(
            f"{_SELECT} WHERE album_id IN ({placeholders}) {TRACKS_BY_TITLE};",
            chunk,
        )
        for row in await cursor.fetchall():
            track = row_to_track(row)
            grouped[track.album_id].append(track)
    return grouped


async def update_track(
    conn: aiosqlite.Connection,
    track_id: uuid.UUID,
    title: str,
    duration: int,
    album_id: uuid.UUID,
) -> int:
    """Full replace of title/duration/album_id. Returns rows changed."""
    cursor = await conn.execute(
        "UPDATE tracks SET title = ?, duration = ?, album_id = ? WHERE id = ?;",
        (title, int(duration), str(album_id), str(track_id)),
    )
    return cursor.rowcount


async def delete_track(conn: aiosqlite.Connection, track_id: uuid.UUID) -> int:
    cursor = await conn.execute("DELETE FROM tracks WHERE id = ?;", (str(track_id),))
    return cursor.rowcount
