"""Core module for the URL service."""

from url_service.core.config import settings

__all__ = ["settings"]
