"""
Web Server Module for the catalog.

This module provides the WebServer class that creates and manages the
FastAPI application, registers all routes, and serves the REST API.

The WebServer integrates:
- Resource routes for artists, albums and tracks (under the API prefix)
- Health and index endpoints (at the application root)
- Exception handlers producing the error envelope
- CORS and per-request logging
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Awaitable, Callable, Sequence

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from discography import __version__
from discography.web.errors import register_exception_handlers
from discography.web.routes import (
    register_album_routes,
    register_artist_routes,
    register_meta_routes,
    register_track_routes,
)

if TYPE_CHECKING:
    from discography.core.albums import AlbumService
    from discography.core.artists import ArtistService
    from discography.core.tracks import TrackService

logger = logging.getLogger(__name__)

SERVICE_NAME = "discography"


class WebServer:
    """
    FastAPI-based web server for the catalog.

    Services are built by the caller and injected; the web layer never opens
    the database itself.
    """

    def __init__(
        self,
        artists: ArtistService,
        albums: AlbumService,
        tracks: TrackService,
        *,
        api_prefix: str = "",
        cors_origins: Sequence[str] = ("*",),
    ) -> None:
        """
        Initialize the WebServer.

        Args:
            artists: Artist service
            albums: Album service
            tracks: Track service
            api_prefix: Path prefix for the resource routes ("" or e.g. "/api")
            cors_origins: Origins allowed by the CORS middleware
        """
        self.artists = artists
        self.albums = albums
        self.tracks = tracks
        self.api_prefix = api_prefix.rstrip("/")

        # Create FastAPI app
        self.app = FastAPI(
            title="Discography",
            description="Music catalog API (artists, albums, tracks)",
            version=__version__,
        )

        # Add CORS middleware
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
        self.app.middleware("http")(self._log_requests)

        register_exception_handlers(self.app)

        # Server state
        self._server: uvicorn.Server | None = None
        self._serve_task: asyncio.Task[None] | None = None
        self._host = "0.0.0.0"
        self._port = 8080

        # Register routes
        self._register_routes()

    def _register_routes(self) -> None:
        """Register all routes with the FastAPI app."""
        register_meta_routes(
            self.app,
            service_name=SERVICE_NAME,
            version=__version__,
            prefix=self.api_prefix,
        )
        register_artist_routes(self.app, self.artists, prefix=self.api_prefix)
        register_album_routes(self.app, self.albums, prefix=self.api_prefix)
        register_track_routes(self.app, self.tracks, prefix=self.api_prefix)

    @staticmethod
    async def _log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    async def start(self, host: str = "0.0.0.0", port: int = 8080) -> None:
        """
        Start the web server.

        Args:
            host: Host address to bind to
            port: Port to listen on
        """
        self._host = host
        self._port = port

        # Configure uvicorn; request logging is done by our middleware.
        config = uvicorn.Config(
            self.app,
            host=host,
            port=port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)

        # Start server in background
        self._serve_task = asyncio.create_task(self._server.serve())

        logger.info("Web server started on http://%s:%d%s", host, port, self.api_prefix)

    async def stop(self) -> None:
        """Stop the web server and wait for uvicorn to finish."""
        if self._server is not None:
            self._server.should_exit = True
            self._server = None

        if self._serve_task is not None:
            await self._serve_task
            self._serve_task = None

        logger.info("Web server stopped")

    @property
    def port(self) -> int:
        """Get the server port."""
        return self._port

    @property
    def host(self) -> str:
        """Get the server host."""
        return self._host
