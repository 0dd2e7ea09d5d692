"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from url_service.api.routes import health, urls


def build_api_router(api_prefix: str) -> APIRouter:
    """Collect every route under the configured API prefix."""
    api_router = APIRouter()
    api_router.include_router(urls.router, prefix=api_prefix)
    api_router.include_router(health.router, prefix=api_prefix)
    return api_router


__all__ = ["build_api_router"]
