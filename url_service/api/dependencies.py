"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints.
Collaborators are built once by the application factory and stored on
``app.state``; these providers only hand them out.
"""

from typing import Optional

from fastapi import Request

from url_service.db.base import DatabaseHealthCheck
from url_service.services.listing import ListingService
from url_service.services.resolver import ResolutionService
from url_service.services.shortener import ShorteningService


def get_shortening_service(request: Request) -> ShorteningService:
    """Get the URL shortening service."""
    return request.app.state.shortening_service


def get_resolution_service(request: Request) -> ResolutionService:
    """Get the short code resolution service."""
    return request.app.state.resolution_service


def get_listing_service(request: Request) -> ListingService:
    """Get the URL listing service."""
    return request.app.state.listing_service


def get_health_check(request: Request) -> Optional[DatabaseHealthCheck]:
    """Get the database health check, or None when no database is configured."""
    return getattr(request.app.state, "health_check", None)
