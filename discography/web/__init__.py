"""
Discography Web Layer.

This package provides the HTTP/REST layer for the catalog.

Components:
- WebServer: FastAPI application with all routes
- schemas: request bodies
- mapping: entity -> wire dicts and response envelopes
- errors: exception handlers producing the error envelope
"""

from discography.web.server import WebServer

__all__ = [
    "WebServer",
]
