"""HTTP middleware for the URL service."""

from url_service.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
