"""
Exception handlers that turn failures into the error envelope.

- CatalogError subclasses carry their own status and title.
- Request validation failures (malformed JSON, missing or wrong-typed
  fields) become 400 "Validation Error".
- Routing errors raised by Starlette (unknown path, wrong method) keep their
  status code.
- Anything else is a 500 with a generic message; the traceback goes to the
  log only.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from discography.core.errors import CatalogError, StorageError
from discography.web.mapping import error_body

logger = logging.getLogger(__name__)

GENERIC_STORAGE_MESSAGE = "A database error occurred"
GENERIC_SERVER_MESSAGE = "An unexpected error occurred"


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def _respond(error: str, message: str, status: int) -> JSONResponse:
    return JSONResponse(status_code=status, content=error_body(error, message, status))


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(
            "Storage failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return _respond(exc.title, GENERIC_STORAGE_MESSAGE, exc.status_code)

    logger.debug("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc)
    return _respond(exc.title, exc.message, exc.status_code)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _respond("Validation Error", describe_validation_errors(exc.errors()), 400)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = "Error"
    response = _respond(title, str(exc.detail), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _respond("Server Error", GENERIC_SERVER_MESSAGE, 500)


def describe_validation_errors(errors: Sequence[Any]) -> str:
    """
    Collapse pydantic error dicts into one readable line.

    Example: "releaseYear: Field required; duration: Input should be a valid integer"
    """
    parts: list[str] = []
    for err in errors:
        if err.get("type") == "json_invalid":
            return "Malformed JSON body"
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = err.get("msg", "Invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
