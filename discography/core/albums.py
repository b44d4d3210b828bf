"""
Album service.

Write pipeline, in order and short-circuiting:
1. title is not blank
2. release year is between MIN_RELEASE_YEAR and MAX_RELEASE_YEAR
3. artistId is canonical UUID text
4. the artist exists
Only then is anything written.
"""

from __future__ import annotations

import logging
import uuid

from discography.core.catalog_db import CatalogDb
from discography.core.errors import ConflictError, NotFoundError, ValidationError
from discography.core.ids import parse_id
from discography.core.models import (
    MAX_RELEASE_YEAR,
    MIN_RELEASE_YEAR,
    Album,
    AlbumWithTracks,
    is_blank,
)

logger = logging.getLogger(__name__)


class AlbumService:
    def __init__(self, db: CatalogDb) -> None:
        self._db = db

    async def create(
        self, title: str, release_year: int, artist_id: uuid.UUID | str
    ) -> Album:
        artist_key = await self._validate(title, release_year, artist_id)
        album = await self._db.insert_album(title.strip(), release_year, artist_key)
        logger.info("Created album %s (%s) for artist %s", album.id, album.title, artist_key)
        return album

    async def list_all(self) -> list[Album]:
        return await self._db.list_albums()

    async def list_by_artist(self, artist_id: uuid.UUID | str) -> list[Album]:
        """Albums of one artist by release year; empty for an unknown artist."""
        return await self._db.list_albums_by_artist(parse_id(artist_id, "artistId"))

    async def get(self, album_id: uuid.UUID | str) -> Album:
        key = parse_id(album_id)
        album = await self._db.get_album(key)
        if album is None:
            raise NotFoundError("album", key)
        return album

    async def get_with_tracks(self, album_id: uuid.UUID | str) -> AlbumWithTracks:
        album = await self.get(album_id)
        tracks = await self._db.list_tracks_by_album(album.id)
        return AlbumWithTracks(album=album, tracks=tuple(tracks))

    async def update(
        self,
        album_id: uuid.UUID | str,
        title: str,
        release_year: int,
        artist_id: uuid.UUID | str,
    ) -> Album:
        key = parse_id(album_id)
        artist_key = await self._validate(title, release_year, artist_id)
        album = await self._db.update_album(key, title.strip(), release_year, artist_key)
        if album is None:
            raise NotFoundError("album", key)
        logger.info("Updated album %s", key)
        return album

    async def delete(self, album_id: uuid.UUID | str) -> None:
        key = parse_id(album_id)
        if await self._db.album_has_tracks(key):
            logger.info("Refused to delete album %s: tracks still reference it", key)
            raise ConflictError("Cannot delete album: it has associated tracks")
        if not await self._db.delete_album(key):
            raise NotFoundError("album", key)
        logger.info("Deleted album %s", key)

    async def _validate(
        self, title: str, release_year: int, artist_id: uuid.UUID | str
    ) -> uuid.UUID:
        if is_blank(title):
            raise ValidationError("Album title is required")
        if release_year < MIN_RELEASE_YEAR:
            raise ValidationError(f"Release year must be {MIN_RELEASE_YEAR} or later")
        if release_year > MAX_RELEASE_YEAR:
            raise ValidationError(f"Release year must be {MAX_RELEASE_YEAR} or earlier")
        artist_key = parse_id(artist_id, "artistId")
        if await self._db.get_artist(artist_key) is None:
            raise NotFoundError("artist", artist_key)
        return artist_key
