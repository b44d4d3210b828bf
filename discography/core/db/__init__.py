"""
Internal DB subpackage for the catalog.

This package splits storage into focused units (connection pool, schema,
row mapping, ordering, and query groups) while keeping `CatalogDb` as the
single public interface that the rest of the codebase imports.

Re-exports here are primarily for convenience inside the `core` package.
External code should import `CatalogDb` from `discography.core.catalog_db`.
"""

from __future__ import annotations

# Connections
from .pool import MEMORY_DB, ConnectionPool

# Row mapping
from .rows import MAPPED_TABLES, row_to_album, row_to_artist, row_to_track, verify_columns

# Schema
from .schema import SCHEMA_VERSION, ensure_schema

__all__ = [
    # pool
    "ConnectionPool",
    "MEMORY_DB",
    # rows
    "MAPPED_TABLES",
    "row_to_artist",
    "row_to_album",
    "row_to_track",
    "verify_columns",
    # schema
    "SCHEMA_VERSION",
    "ensure_schema",
]
