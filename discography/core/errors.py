"""
Error kinds raised by the catalog core.

Every error the services raise on purpose derives from `CatalogError` and
carries the HTTP status and short title the web layer puts in the error
envelope. The web layer never has to guess: it maps the class, not the
message.

- ValidationError  -> 400 (malformed or out-of-range input)
- InvalidIdError   -> 400 (identifier is not canonical UUID text)
- NotFoundError    -> 404 (target or referenced entity is absent)
- ConflictError    -> 409 (delete blocked by dependents)
- StorageError     -> 500 (anything unexpected from SQLite)
"""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base error for catalog operations."""

    status_code: int = 500
    title: str = "Server Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Raised when input fails a syntax or business rule."""

    status_code = 400
    title = "Validation Error"


class InvalidIdError(ValidationError):
    """Raised when an identifier is not canonical UUID text."""

    title = "Bad Request"

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Invalid {field}: {value!r} is not a valid UUID")
        self.field = field


class NotFoundError(CatalogError):
    """Raised when the target or a referenced entity does not exist."""

    status_code = 404
    title = "Not Found"

    def __init__(self, resource: str, resource_id: object) -> None:
        super().__init__(f"{resource.capitalize()} with id {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(CatalogError):
    """Raised when a delete is refused because dependents still exist."""

    status_code = 409
    title = "Conflict"


class StorageError(CatalogError):
    """Raised when the database fails in a way the caller cannot fix."""

    status_code = 500
    title = "Server Error"
