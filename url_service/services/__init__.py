"""Service layer for the URL service.

This package contains service classes implementing the business logic of the application.
Services orchestrate interactions between the URL store and the pure helpers for
validation and short code generation.
"""

from url_service.services.listing import ListingService
from url_service.services.resolver import ResolutionService
from url_service.services.shortener import ShorteningService

__all__ = ["ShorteningService", "ResolutionService", "ListingService"]
