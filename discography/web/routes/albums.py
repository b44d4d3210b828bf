"""
Album routes.

- POST   /albums                    create (artist must exist)
- GET    /albums                    list (by title)
- GET    /albums/{id}               album with tracks
- GET    /albums/artist/{artistId}  albums of one artist (by release year)
- PUT    /albums/{id}               full replace
- DELETE /albums/{id}               refused with 409 while tracks exist
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, FastAPI

from discography.web.mapping import album_to_dict, album_with_tracks_to_dict, success
from discography.web.schemas import AlbumRequest

if TYPE_CHECKING:
    from discography.core.albums import AlbumService


def register_album_routes(app: FastAPI, albums: AlbumService, prefix: str = "") -> None:
    """Register album routes with the FastAPI app."""
    router = APIRouter(prefix=f"{prefix}/albums", tags=["albums"])

    @router.post("", status_code=201)
    async def create_album(body: AlbumRequest) -> dict[str, Any]:
        album = await albums.create(body.title, body.release_year, body.artist_id)
        return success(album_to_dict(album), "Album created successfully", 201)

    @router.get("")
    async def list_albums() -> dict[str, Any]:
        items = await albums.list_all()
        return success([album_to_dict(a) for a in items], "Albums retrieved successfully")

    @router.get("/artist/{artist_id}")
    async def list_albums_by_artist(artist_id: str) -> dict[str, Any]:
        items = await albums.list_by_artist(artist_id)
        return success([album_to_dict(a) for a in items], "Albums retrieved successfully")

    @router.get("/{album_id}")
    async def get_album(album_id: str) -> dict[str, Any]:
        item = await albums.get_with_tracks(album_id)
        return success(album_with_tracks_to_dict(item), "Album retrieved successfully")

    @router.put("/{album_id}")
    async def update_album(album_id: str, body: AlbumRequest) -> dict[str, Any]:
        album = await albums.update(album_id, body.title, body.release_year, body.artist_id)
        return success(album_to_dict(album), "Album updated successfully")

    @router.delete("/{album_id}")
    async def delete_album(album_id: str) -> dict[str, Any]:
        await albums.delete(album_id)
        return success(None, "Album deleted successfully")

    app.include_router(router)
