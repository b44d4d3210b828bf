"""
Entity -> wire mapping and response envelopes.

Every successful response body is `{data, status, message}`; every error body
is `{error, message, status, timestamp}` with `timestamp` in epoch
milliseconds.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Any

from discography.core.models import Album, AlbumWithTracks, Artist, ArtistWithAlbums, Track

CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_created_at(value: datetime) -> str:
    return value.strftime(CREATED_AT_FORMAT)


def now_millis() -> int:
    return int(time.time() * 1000)


# =============================================================================
# Entities
# =============================================================================


def artist_to_dict(artist: Artist) -> dict[str, Any]:
    return {
        "id": str(artist.id),
        "name": artist.name,
        "genre": artist.genre,
        "createdAt": format_created_at(artist.created_at),
    }


def album_to_dict(album: Album) -> dict[str, Any]:
    return {
        "id": str(album.id),
        "title": album.title,
        "releaseYear": album.release_year,
        "artistId": str(album.artist_id),
        "createdAt": format_created_at(album.created_at),
    }


def track_to_dict(track: Track) -> dict[str, Any]:
    return {
        "id": str(track.id),
        "title": track.title,
        "duration": track.duration,
        "albumId": str(track.album_id),
        "createdAt": format_created_at(track.created_at),
    }


def album_with_tracks_to_dict(item: AlbumWithTracks) -> dict[str, Any]:
    result = album_to_dict(item.album)
    result["tracks"] = [track_to_dict(t) for t in item.tracks]
    return result


def artist_with_albums_to_dict(item: ArtistWithAlbums) -> dict[str, Any]:
    result = artist_to_dict(item.artist)
    result["albums"] = [album_with_tracks_to_dict(a) for a in item.albums]
    return result


# =============================================================================
# Envelopes
# =============================================================================


def success(data: Any, message: str, status: int = 200) -> dict[str, Any]:
    return {"data": data, "status": status, "message": message}


def error_body(error: str, message: str, status: int) -> dict[str, Any]:
    return {
        "error": error,
        "message": message,
        "status": status,
        "timestamp": now_millis(),
    }
