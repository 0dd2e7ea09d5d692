"""Database base configuration for SQLAlchemy with SQLModel.

This module builds the async engine and session factory from settings.
Nothing here is created at import time; the application factory owns the
engine and passes the session factory to the repository.
It includes:
- Engine configuration per environment
- Schema creation
- Health check functionality
"""

import asyncio
import logging
from typing import Any, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from url_service.core.config import EnvironmentType, Settings

logger = logging.getLogger(__name__)


def get_engine_config(settings: Settings) -> Dict[str, Any]:
    """Get the SQLAlchemy engine configuration for the current environment.

    Returns:
        Dict: Engine configuration parameters.
    """
    if settings.ENVIRONMENT == EnvironmentType.TESTING:
        return {"echo": False, "poolclass": NullPool}

    url = make_url(settings.SQLALCHEMY_DATABASE_URI)
    if url.get_backend_name() == "sqlite":
        return {"echo": settings.DB_ECHO}

    return {
        "echo": settings.DB_ECHO,
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.POSTGRES_POOL_TIMEOUT,
        "pool_recycle": settings.POSTGRES_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = settings.SQLALCHEMY_DATABASE_URI
    logger.info(
        f"Creating database engine for {make_url(engine_url).render_as_string(hide_password=True)}"
    )
    return create_async_engine(engine_url, **get_engine_config(settings))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the session factory used by repositories."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create tables and indexes that do not exist yet."""
    # Register table models with the metadata
    import url_service.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema is up to date")


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def check_connection(self) -> Dict[str, Any]:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
