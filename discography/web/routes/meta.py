"""
Service-level endpoints that live at the application root regardless of the
API prefix:

- GET /health  liveness check
- GET /        index of the resource endpoints
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, FastAPI

from discography.web.mapping import now_millis

# (method, path relative to the API prefix, description)
ENDPOINTS: tuple[tuple[str, str, str], ...] = (
    ("POST", "/artists", "Create artist"),
    ("GET", "/artists", "List artists"),
    ("GET", "/artists/{id}", "Get artist with albums and tracks"),
    ("PUT", "/artists/{id}", "Update artist"),
    ("DELETE", "/artists/{id}", "Delete artist"),
    ("POST", "/albums", "Create album"),
    ("GET", "/albums", "List albums"),
    ("GET", "/albums/{id}", "Get album with tracks"),
    ("GET", "/albums/artist/{artistId}", "List albums by artist"),
    ("PUT", "/albums/{id}", "Update album"),
    ("DELETE", "/albums/{id}", "Delete album"),
    ("POST", "/tracks", "Create track"),
    ("GET", "/tracks", "List tracks"),
    ("GET", "/tracks/{id}", "Get track"),
    ("GET", "/tracks/album/{albumId}", "List tracks by album"),
    ("PUT", "/tracks/{id}", "Update track"),
    ("DELETE", "/tracks/{id}", "Delete track"),
)


def register_meta_routes(
    app: FastAPI,
    *,
    service_name: str,
    version: str,
    prefix: str = "",
) -> None:
    router = APIRouter(tags=["meta"])

    @router.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "service": service_name, "timestamp": now_millis()}

    @router.get("/")
    async def index() -> dict[str, Any]:
        return {
            "message": "Music Catalog API",
            "version": version,
            "endpoints": [
                {"method": method, "path": f"{prefix}{path}", "description": description}
                for method, path, description in ENDPOINTS
            ],
            "documentation": "/docs",
            "health": "/health",
        }

    app.include_router(router)
