"""Database module for the URL service."""
from url_service.db.base import (
    DatabaseHealthCheck,
    create_engine_from_settings,
    create_session_factory,
    init_models,
)
from url_service.db.session import SessionManager

__all__ = [
    "DatabaseHealthCheck",
    "create_engine_from_settings",
    "create_session_factory",
    "init_models",
    "SessionManager",
]
