from __future__ import annotations

import logging
import uuid

from discography.core.catalog_db import CatalogDb
from discography.core.errors import NotFoundError, ValidationError
from discography.core.ids import parse_id
from discography.core.models import MAX_DURATION, Track, is_blank

logger = logging.getLogger(__name__)


class TrackService:
    """Track CRUD; a track must point at an existing album."""

    def __init__(self, db: CatalogDb) -> None:
        self._db = db

    async def create(self, title: str, duration: int, album_id: uuid.UUID | str) -> Track:
        album_key = await self._validate(title, duration, album_id)
        track = await self._db.insert_track(title.strip(), duration, album_key)
        logger.info("Created track %s (%s) on album %s", track.id, track.title, album_key)
        return track

    async def list_all(self) -> list[Track]:
        return await self._db.list_tracks()

    async def list_by_album(self, album_id: uuid.UUID | str) -> list[Track]:
        return await self._db.list_tracks_by_album(parse_id(album_id, "albumId"))

    async def get(self, track_id: uuid.UUID | str) -> Track:
        key = parse_id(track_id)
        track = await self._db.get_track(key)
        if track is None:
            raise NotFoundError("track", key)
        return track

    async def update(
        self,
        track_id: uuid.UUID | str,
        title: str,
        duration: int,
        album_id: uuid.UUID | str,
    ) -> Track:
        key = parse_id(track_id)
        album_key = await self._validate(title, duration, album_id)
        track = await self._db.update_track(key, title.strip(), duration, album_key)
        if track is None:
            raise NotFoundError("track", key)
        logger.info("Updated track %s", key)
        return track

    async def delete(self, track_id: uuid.UUID | str) -> None:
        key = parse_id(track_id)
        if not await self._db.delete_track(key):
            raise NotFoundError("track", key)
        logger.info("Deleted track %s", key)

    async def _validate(self, title: str, duration: int, album_id: uuid.UUID | str) -> uuid.UUID:
        if is_blank(title):
            raise ValidationError("Track title is required")
        if duration <= 0:
            raise ValidationError("Duration must be greater than 0")
        if duration > MAX_DURATION:
            raise ValidationError(f"Duration must be at most {MAX_DURATION} seconds")
        album_key = parse_id(album_id, "albumId")
        if await self._db.get_album(album_key) is None:
            raise NotFoundError("album", album_key)
        return album_key
