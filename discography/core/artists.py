"""
Artist service.

Owns the write pipeline for artists (syntax check, business rule, persist)
and assembles the "artist with albums and tracks" tree for the detail view.
"""

from __future__ import annotations

import logging
import uuid

from discography.core.catalog_db import CatalogDb
from discography.core.errors import ConflictError, NotFoundError, ValidationError
from discography.core.ids import parse_id
from discography.core.models import (
    AlbumWithTracks,
    Artist,
    ArtistWithAlbums,
    is_blank,
    normalize_text,
)

logger = logging.getLogger(__name__)


class ArtistService:
    """
    Artist CRUD on top of an injected `CatalogDb`.

    The service holds no state besides the handle; every method is safe to
    call from concurrent requests.
    """

    def __init__(self, db: CatalogDb) -> None:
        self._db = db

    async def create(self, name: str, genre: str | None = None) -> Artist:
        _validate_name(name)
        artist = await self._db.insert_artist(name.strip(), normalize_text(genre))
        logger.info("Created artist %s (%s)", artist.id, artist.name)
        return artist

    async def list_all(self) -> list[Artist]:
        return await self._db.list_artists()

    async def get(self, artist_id: uuid.UUID | str) -> Artist:
        key = parse_id(artist_id)
        artist = await self._db.get_artist(key)
        if artist is None:
            raise NotFoundError("artist", key)
        return artist

    async def get_with_relations(self, artist_id: uuid.UUID | str) -> ArtistWithAlbums:
        """
        Load an artist with its albums (by release year) and their tracks.

        Tracks for all albums are fetched in a single query rather than one
        query per album.
        """
        artist = await self.get(artist_id)
        albums = await self._db.list_albums_by_artist(artist.id)
        tracks_by_album = await self._db.list_tracks_by_albums(a.id for a in albums)
        return ArtistWithAlbums(
            artist=artist,
            albums=tuple(
                AlbumWithTracks(album=a, tracks=tuple(tracks_by_album.get(a.id, ())))
                for a in albums
            ),
        )

    async def update(
        self, artist_id: uuid.UUID | str, name: str, genre: str | None = None
    ) -> Artist:
        """Full replace: an omitted genre clears the stored one."""
        key = parse_id(artist_id)
        _validate_name(name)
        artist = await self._db.update_artist(key, name.strip(), normalize_text(genre))
        if artist is None:
            raise NotFoundError("artist", key)
        logger.info("Updated artist %s", key)
        return artist

    async def delete(self, artist_id: uuid.UUID | str) -> None:
        key = parse_id(artist_id)
        if await self._db.artist_has_albums(key):
            logger.info("Refused to delete artist %s: albums still reference it", key)
            raise ConflictError("Cannot delete artist: it has associated albums")
        if not await self._db.delete_artist(key):
            raise NotFoundError("artist", key)
        logger.info("Deleted artist %s", key)


def _validate_name(name: str | None) -> None:
    if is_blank(name):
        raise ValidationError("Artist name is required")
