"""
Discography Server - Main Server Module

This module contains the CatalogServer class that builds the storage handle,
services and web server, and manages their lifecycle.
"""

import asyncio
import logging
import signal

from discography.config import CatalogConfig
from discography.core.albums import AlbumService
from discography.core.artists import ArtistService
from discography.core.catalog_db import CatalogDb
from discography.core.tracks import TrackService
from discography.web.server import WebServer

logger = logging.getLogger(__name__)


class CatalogServer:
    """
    Composition root for the catalog API.

    The server manages:
    - CatalogDb (SQLite connection pool + schema)
    - Artist, album and track services
    - Web server for the HTTP API
    """

    def __init__(self, config: CatalogConfig | None = None) -> None:
        self.config = config or CatalogConfig()

        db_config = self.config.database
        self.catalog_db = CatalogDb(
            db_config.path,
            pool_size=db_config.pool_size,
            busy_timeout=db_config.busy_timeout,
        )

        self.artists = ArtistService(self.catalog_db)
        self.albums = AlbumService(self.catalog_db)
        self.tracks = TrackService(self.catalog_db)

        # Web server (created on start)
        self.web_server: WebServer | None = None

        # Server state
        self._running = False
        self._shutdown_event: asyncio.Event | None = None

    def build_web_server(self) -> WebServer:
        server_config = self.config.server
        return WebServer(
            self.artists,
            self.albums,
            self.tracks,
            api_prefix=server_config.api_prefix,
            cors_origins=server_config.cors_origins,
        )

    async def start(self) -> None:
        """Open the database and start serving HTTP."""
        server_config = self.config.server
        logger.info("Starting catalog server on %s:%d", server_config.host, server_config.port)

        self._running = True
        self._shutdown_event = asyncio.Event()

        await self.catalog_db.open()
        try:
            await self.catalog_db.ensure_schema()
        except BaseException:
            await self.catalog_db.close()
            self._running = False
            raise

        self.web_server = self.build_web_server()
        await self.web_server.start(host=server_config.host, port=server_config.port)

        logger.info("Catalog server started")

    async def stop(self) -> None:
        """Stop all server components gracefully."""
        if not self._running:
            return

        logger.info("Stopping catalog server...")
        self._running = False

        # Stop Web server first so no request touches a closed pool.
        if self.web_server:
            await self.web_server.stop()
            self.web_server = None

        # Close the database last, after all components are stopped.
        await self.catalog_db.close()

        if self._shutdown_event:
            self._shutdown_event.set()

        logger.info("Catalog server stopped")

    async def run(self) -> None:
        """
        Run the server until shutdown is requested.

        This method starts all components and waits for a shutdown signal
        (SIGINT or SIGTERM).
        """
        await self.start()

        # Set up signal handlers for graceful shutdown
        loop = asyncio.get_running_loop()

        def handle_signal() -> None:
            logger.info("Received shutdown signal")
            if self._shutdown_event:
                self._shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, handle_signal)
            except NotImplementedError:
                # Signal handlers not supported on Windows
                pass

        # Wait for shutdown
        if self._shutdown_event:
            await self._shutdown_event.wait()

        await self.stop()

    @property
    def is_running(self) -> bool:
        """Check if the server is currently running."""
        return self._running
