"""
Configuration management for the catalog server.

Settings are loaded from a TOML file (by default `catalog.toml` next to this
module). Missing keys fall back to the dataclass defaults; values that cannot
work (pool size below 1, a port outside 1-65535, an API prefix without a
leading slash) raise ConfigError at load time instead of at first use.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Path to the config directory
CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_FILE = CONFIG_DIR / "catalog.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when the configuration file or a value in it is invalid."""


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = ""
    cors_origins: tuple[str, ...] = ("*",)


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    path: str = "discography.sqlite3"
    pool_size: int = 4
    busy_timeout: float = 5.0  # seconds


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Loaded server configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    log_level: str = "INFO"

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        db_path: str | None = None,
    ) -> CatalogConfig:
        """Return a copy with CLI overrides applied (None leaves a value as is)."""
        server = self.server
        if host is not None:
            server = replace(server, host=host)
        if port is not None:
            server = replace(server, port=port)
        database = self.database
        if db_path is not None:
            database = replace(database, path=db_path)
        updated = replace(self, server=server, database=database)
        validate_config(updated)
        return updated


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _parse_server(data: dict[str, Any]) -> ServerConfig:
    defaults = ServerConfig()
    origins = data.get("cors_origins", list(defaults.cors_origins))
    if isinstance(origins, str):
        origins = [origins]
    if not isinstance(origins, list) or not all(isinstance(o, str) for o in origins):
        raise ConfigError("server.cors_origins must be a list of strings")
    try:
        return ServerConfig(
            host=str(data.get("host", defaults.host)),
            port=int(data.get("port", defaults.port)),
            api_prefix=str(data.get("api_prefix", defaults.api_prefix)),
            cors_origins=tuple(origins),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid [server] value: {e}") from e


def _parse_database(data: dict[str, Any]) -> DatabaseConfig:
    defaults = DatabaseConfig()
    try:
        return DatabaseConfig(
            path=str(data.get("path", defaults.path)),
            pool_size=int(data.get("pool_size", defaults.pool_size)),
            busy_timeout=float(data.get("busy_timeout", defaults.busy_timeout)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid [database] value: {e}") from e


def validate_config(config: CatalogConfig) -> None:
    """Raise ConfigError if any value cannot work."""
    if not 1 <= config.server.port <= 65535:
        raise ConfigError(f"server.port must be between 1 and 65535, got {config.server.port}")
    prefix = config.server.api_prefix
    if prefix and not prefix.startswith("/"):
        raise ConfigError(f"server.api_prefix must start with '/', got {prefix!r}")
    if config.database.pool_size < 1:
        raise ConfigError(f"database.pool_size must be >= 1, got {config.database.pool_size}")
    if config.database.busy_timeout < 0:
        raise ConfigError("database.busy_timeout must not be negative")
    if config.log_level not in _LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}")


def parse_config(data: dict[str, Any]) -> CatalogConfig:
    """Build a CatalogConfig from already-parsed TOML data."""
    server = _parse_server(_section(data, "server"))
    database = _parse_database(_section(data, "database"))
    log_level = str(_section(data, "logging").get("level", "INFO")).upper()

    config = CatalogConfig(server=server, database=database, log_level=log_level)
    validate_config(config)
    return config


def load_config(config_path: Path | None = None) -> CatalogConfig:
    """
    Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML file. If None, uses the packaged default.

    Returns:
        Loaded CatalogConfig instance.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE

    logger.debug("Loading config from %s", config_path)

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    return parse_config(data)


__all__ = [
    "CatalogConfig",
    "ConfigError",
    "DatabaseConfig",
    "ServerConfig",
    "load_config",
    "parse_config",
    "validate_config",
]
