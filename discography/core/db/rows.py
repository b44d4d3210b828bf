"""
Row -> entity mapping.

Each entity has exactly one mapping function and one declared column tuple.
`verify_columns()` runs once when the schema is ensured: if a table lacks a
column its mapper reads, we refuse to start instead of failing on the first
request that touches the row.

These functions assume `conn.row_factory = aiosqlite.Row`.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Final

import aiosqlite

from discography.core.errors import StorageError
from discography.core.models import Album, Artist, Track

ARTIST_COLUMNS: Final[tuple[str, ...]] = ("id", "name", "genre", "created_at")
ALBUM_COLUMNS: Final[tuple[str, ...]] = ("id", "title", "release_year", "artist_id", "created_at")
TRACK_COLUMNS: Final[tuple[str, ...]] = ("id", "title", "duration", "album_id", "created_at")

# table name -> columns its mapper requires
MAPPED_TABLES: Final[dict[str, tuple[str, ...]]] = {
    "artists": ARTIST_COLUMNS,
    "albums": ALBUM_COLUMNS,
    "tracks": TRACK_COLUMNS,
}


def select_list(columns: tuple[str, ...]) -> str:
    """Render a column tuple as a SELECT list."""
    return ", ".join(columns)


def _parse_timestamp(value: str) -> datetime:
    # SQLite stores "YYYY-MM-DD HH:MM:SS.SSS" (UTC)
    return datetime.fromisoformat(value)


def row_to_artist(row: aiosqlite.Row) -> Artist:
    return Artist(
        id=uuid.UUID(row["id"]),
        name=row["name"],
        genre=row["genre"],
        created_at=_parse_timestamp(row["created_at"]),
    )


def row_to_album(row: aiosqlite.Row) -> Album:
    return Album(
        id=uuid.UUID(row["id"]),
        title=row["title"],
        release_year=int(row["release_year"]),
        artist_id=uuid.UUID(row["artist_id"]),
        created_at=_parse_timestamp(row["created_at"]),
    )


def row_to_track(row: aiosqlite.Row) -> Track:
    return Track(
        id=uuid.UUID(row["id"]),
        title=row["title"],
        duration=int(row["duration"]),
        album_id=uuid.UUID(row["album_id"]),
        created_at=_parse_timestamp(row["created_at"]),
    )


async def table_columns(conn: aiosqlite.Connection, table: str) -> set[str]:
    # Table names come from MAPPED_TABLES only; PRAGMA cannot take parameters.
    cursor = await conn.execute(f"PRAGMA table_info({table});")
    rows = await cursor.fetchall()
    return {str(r["name"]) for r in rows}


async def verify_columns(conn: aiosqlite.Connection) -> None:
    """
    Check every mapped table against its mapper's declared columns.

    Raises StorageError naming the first table with missing columns.
    """
    for table, required in MAPPED_TABLES.items():
        present = await table_columns(conn, table)
        missing = [c for c in required if c not in present]
        if missing:
            raise StorageError(
                f"Table '{table}' is missing required columns: {', '.join(missing)}"
            )
