"""
Discography Catalog Server - Entry Point

Run with: python -m discography
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from discography import __version__
from discography.config import CatalogConfig, ConfigError, load_config
from discography.server import CatalogServer


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="discography",
        description="Discography - a REST API for artists, albums and tracks",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML config file (default: packaged catalog.toml)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address to bind to (overrides config)",
    )

    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="HTTP port (overrides config)",
    )

    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="SQLite database path, or :memory: (overrides config)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CatalogConfig:
    """Load the config file and apply CLI overrides."""
    config = load_config(args.config)
    return config.with_overrides(host=args.host, port=args.port, db_path=args.db)


async def run_server(config: CatalogConfig) -> None:
    """Start and run the catalog server."""
    server = CatalogServer(config)
    await server.run()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"discography: configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(level=config.log_level, verbose=args.verbose)

    logger = logging.getLogger(__name__)
    logger.info("Starting Discography %s...", __version__)

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user")
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        return 1

    logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
