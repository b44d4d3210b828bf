"""
Catalog entities.

Pure frozen dataclasses: no SQL and no wire knowledge. The gateway builds them
from rows, the services return them, and `discography.web.mapping` renders
them for HTTP.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Final

MIN_RELEASE_YEAR: Final[int] = 1900
MAX_RELEASE_YEAR: Final[int] = 9999

# Largest value a SQLite INTEGER column can hold (signed 64-bit).
MAX_DURATION: Final[int] = 2**63 - 1


@dataclass(frozen=True, slots=True)
class Artist:
    id: uuid.UUID
    name: str
    genre: str | None
    created_at: datetime


@dataclass(frozen=True, slots=True)
class Album:
    id: uuid.UUID
    title: str
    release_year: int
    artist_id: uuid.UUID
    created_at: datetime


@dataclass(frozen=True, slots=True)
class Track:
    id: uuid.UUID
    title: str
    duration: int  # seconds
    album_id: uuid.UUID
    created_at: datetime


@dataclass(frozen=True, slots=True)
class AlbumWithTracks:
    """An album plus its tracks, ordered by title."""

    album: Album
    tracks: tuple[Track, ...] = ()


@dataclass(frozen=True, slots=True)
class ArtistWithAlbums:
    """An artist plus its albums (by release year), each with its tracks."""

    artist: Artist
    albums: tuple[AlbumWithTracks, ...] = ()


def normalize_text(value: str | None) -> str | None:
    """
    Normalize optional text fields:
    - strip whitespace
    - coerce empty strings to None
    """
    if value is None:
        return None
    v = value.strip()
    return v if v else None


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
