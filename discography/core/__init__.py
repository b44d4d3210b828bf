"""
Core domain package.

This package contains the catalog's business logic and storage, independent
of any UI layer (web, CLI, etc.). The goal is to keep this layer small,
testable, and free of networking concerns.

We intentionally keep exports minimal; consumers should usually import from the
specific module they need (e.g. `discography.core.albums`).
"""

from __future__ import annotations

from discography.core.errors import (
    CatalogError,
    ConflictError,
    InvalidIdError,
    NotFoundError,
    StorageError,
    ValidationError,
)

__all__: list[str] = [
    "CatalogError",
    "ConflictError",
    "InvalidIdError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
