"""API package for the URL service.

This package contains the HTTP routes, schemas and dependency providers.
"""

from url_service.api.routes import build_api_router

__all__ = ["build_api_router"]
