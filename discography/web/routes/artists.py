"""
Artist routes.

- POST   /artists        create
- GET    /artists        list (by name)
- GET    /artists/{id}   artist with albums and tracks
- PUT    /artists/{id}   full replace
- DELETE /artists/{id}   refused with 409 while albums exist
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, FastAPI

from discography.web.mapping import artist_to_dict, artist_with_albums_to_dict, success
from discography.web.schemas import ArtistRequest

if TYPE_CHECKING:
    from discography.core.artists import ArtistService


def register_artist_routes(app: FastAPI, artists: ArtistService, prefix: str = "") -> None:
    """
    Register artist routes with the FastAPI app.

    Args:
        app: FastAPI application instance
        artists: ArtistService the handlers delegate to
        prefix: Path prefix for the resource (e.g. "/api")
    """
    router = APIRouter(prefix=f"{prefix}/artists", tags=["artists"])

    @router.post("", status_code=201)
    async def create_artist(body: ArtistRequest) -> dict[str, Any]:
        artist = await artists.create(body.name, body.genre)
        return success(artist_to_dict(artist), "Artist created successfully", 201)

    @router.get("")
    async def list_artists() -> dict[str, Any]:
        items = await artists.list_all()
        return success([artist_to_dict(a) for a in items], "Artists retrieved successfully")

    @router.get("/{artist_id}")
    async def get_artist(artist_id: str) -> dict[str, Any]:
        tree = await artists.get_with_relations(artist_id)
        return success(artist_with_albums_to_dict(tree), "Artist retrieved successfully")

    @router.put("/{artist_id}")
    async def update_artist(artist_id: str, body: ArtistRequest) -> dict[str, Any]:
        artist = await artists.update(artist_id, body.name, body.genre)
        return success(artist_to_dict(artist), "Artist updated successfully")

    @router.delete("/{artist_id}")
    async def delete_artist(artist_id: str) -> dict[str, Any]:
        await artists.delete(artist_id)
        return success(None, "Artist deleted successfully")

    app.include_router(router)
