"""
Web Routes Package.

This package contains FastAPI route modules:
- artists: /artists
- albums: /albums
- tracks: /tracks
- meta: /health and the / index
"""

from discography.web.routes.albums import register_album_routes
from discography.web.routes.artists import register_artist_routes
from discography.web.routes.meta import register_meta_routes
from discography.web.routes.tracks import register_track_routes

__all__ = [
    "register_album_routes",
    "register_artist_routes",
    "register_meta_routes",
    "register_track_routes",
]
