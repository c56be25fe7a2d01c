"""
Quad API package.

Provides the FastAPI application for the Quad campus network service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
