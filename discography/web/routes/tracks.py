from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, FastAPI

from discography.web.mapping import success, track_to_dict
from discography.web.schemas import TrackRequest

if TYPE_CHECKING:
    from discography.core.tracks import TrackService


def register_track_routes(app: FastAPI, tracks: TrackService, prefix: str = "") -> None:
    """Register track routes (`/tracks`, `/tracks/album/{albumId}`) with the app."""
    router = APIRouter(prefix=f"{prefix}/tracks", tags=["tracks"])

    @router.post("", status_code=201)
    async def create_track(body: TrackRequest) -> dict[str, Any]:
        track = await tracks.create(body.title, body.duration, body.album_id)
        return success(track_to_dict(track), "Track created successfully", 201)

    @router.get("")
    async def list_tracks() -> dict[str, Any]:
        items = await tracks.list_all()
        return success([track_to_dict(t) for t in items], "Tracks retrieved successfully")

    @router.get("/album/{album_id}")
    async def list_tracks_by_album(album_id: str) -> dict[str, Any]:
        items = await tracks.list_by_album(album_id)
        return success([track_to_dict(t) for t in items], "Tracks retrieved successfully")

    @router.get("/{track_id}")
    async def get_track(track_id: str) -> dict[str, Any]:
        track = await tracks.get(track_id)
        return success(track_to_dict(track), "Track retrieved successfully")

    @router.put("/{track_id}")
    async def update_track(track_id: str, body: TrackRequest) -> dict[str, Any]:
        track = await tracks.update(track_id, body.title, body.duration, body.album_id)
        return success(track_to_dict(track), "Track updated successfully")

    @router.delete("/{track_id}")
    async def delete_track(track_id: str) -> dict[str, Any]:
        await tracks.delete(track_id)
        return success(None, "Track deleted successfully")

    app.include_router(router)
