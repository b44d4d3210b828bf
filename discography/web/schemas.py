"""
Request bodies.

Field names on the wire are camelCase; Python attributes are snake_case.
Models are strict: a number where a string is expected (or a string where a
number is expected) is a validation error rather than a silent coercion.
Business rules (blank titles, year range, id syntax) are left to the services
so they produce the same errors regardless of the caller.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArtistRequest(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)

    name: str
    genre: str | None = None


class AlbumRequest(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)

    title: str
    release_year: int = Field(alias="releaseYear")
    artist_id: str = Field(alias="artistId")


class TrackRequest(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)

    title: str
    duration: int
    album_id: str = Field(alias="albumId")
