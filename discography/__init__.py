"""
Discography - a REST API over a catalog of artists, albums and tracks.

Artists own albums, albums own tracks; a parent cannot be deleted while it
still has children. Storage is SQLite through aiosqlite, the HTTP layer is
FastAPI served by uvicorn.
"""

__version__ = "0.1.0"
__author__ = "Discography Contributors"

from discography.server import CatalogServer

__all__ = ["CatalogServer", "__version__"]
