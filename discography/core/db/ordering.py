"""
Shared ORDER BY fragments for catalog listings.

These are static SQL fragments; nothing here is built from request input.
Every ordering ends in `created_at, id` so ties never depend on the order the
database happens to return rows in.
"""

from __future__ import annotations

from typing import Final

ARTISTS_BY_NAME: Final[str] = "ORDER BY name COLLATE NOCASE ASC, created_at ASC, id ASC"

ALBUMS_BY_TITLE: Final[str] = "ORDER BY title COLLATE NOCASE ASC, created_at ASC, id ASC"

ALBUMS_BY_RELEASE_YEAR: Final[str] = (
    "ORDER BY release_year ASC, title COLLATE NOCASE ASC, created_at ASC, id ASC"
)

TRACKS_BY_TITLE: Final[str] = "ORDER BY title COLLATE NOCASE ASC, created_at ASC, id ASC"
