"""Main application module.

This module builds the FastAPI application, includes routes, and configures
middleware, exception handlers and the startup/shutdown lifecycle.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from url_service.api import build_api_router
from url_service.core.background import DetachedTaskRunner
from url_service.core.config import Settings, settings as default_settings
from url_service.core.logging import setup_logging
from url_service.db.base import (
    DatabaseHealthCheck,
    create_engine_from_settings,
    create_session_factory,
    init_models,
)
from url_service.db.session import SessionManager
from url_service.middleware.logging import RequestLoggingMiddleware
from url_service.repositories.base import URLStore
from url_service.repositories.url_repository import URLRepository
from url_service.services.exceptions import (
    InvalidInputError,
    ServiceError,
    StoreUnavailableError,
    URLCreationError,
    URLNotFoundError,
)
from url_service.services.listing import ListingService
from url_service.services.resolver import ResolutionService
from url_service.services.shortener import ShorteningService

# Most specific first; the first match wins
ERROR_STATUS_CODES = (
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, "invalid_input"),
    (URLNotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (URLCreationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "creation_failed"),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE, "store_unavailable"),
)


def build_services(app: FastAPI, store: URLStore, app_settings: Settings) -> None:
    """Wire the task runner and services onto ``app.state``."""
    task_runner = DetachedTaskRunner()
    app.state.task_runner = task_runner
    app.state.url_store = store
    app.state.shortening_service = ShorteningService(
        store,
        max_url_length=app_settings.URL_MAX_LENGTH,
        code_length=app_settings.SHORT_CODE_LENGTH,
    )
    app.state.resolution_service = ResolutionService(store, task_runner)
    app.state.listing_service = ListingService(
        store,
        default_page_size=app_settings.DEFAULT_PAGE_SIZE,
        max_page_size=app_settings.MAX_PAGE_SIZE,
    )


def create_app(app_settings: Optional[Settings] = None, store: Optional[URLStore] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the environment-loaded settings
        store: URL store to use instead of the database-backed repository

    Returns:
        FastAPI: The configured application
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings)
        logger.info(f"Starting {app_settings.APP_NAME} v{app_settings.APP_VERSION}")
        logger.info(f"Environment: {app_settings.ENVIRONMENT.value}")

        engine = None
        url_store = store
        if url_store is None:
            engine = create_engine_from_settings(app_settings)
            await init_models(engine)
            session_factory = create_session_factory(engine)
            url_store = URLRepository(SessionManager(session_factory))
            app.state.health_check = DatabaseHealthCheck(session_factory)

        build_services(app, url_store, app_settings)

        try:
            yield
        finally:
            logger.info(f"Shutting down {app_settings.APP_NAME}")
            task_runner: DetachedTaskRunner = app.state.task_runner
            unfinished = await task_runner.drain(timeout=app_settings.SHUTDOWN_TIMEOUT_SECONDS)
            if unfinished:
                logger.warning(f"Cancelling {unfinished} unfinished click update(s)")
                await task_runner.cancel_all()
            if engine is not None:
                await engine.dispose()
            logger.info("Shutdown complete")

    app = FastAPI(
        title=app_settings.APP_NAME,
        description=app_settings.APP_DESCRIPTION,
        version=app_settings.APP_VERSION,
        docs_url="/docs" if app_settings.DEBUG else None,
        redoc_url="/redoc" if app_settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    if app_settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(build_api_router(app_settings.API_PREFIX))

    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        """Translate service errors into HTTP responses."""
        status_code, error_code = status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"
        for error_type, mapped_status, mapped_code in ERROR_STATUS_CODES:
            if isinstance(exc, error_type):
                status_code, error_code = mapped_status, mapped_code
                break

        content = {"detail": str(exc), "error_code": error_code}
        kind = getattr(exc, "kind", None)
        if kind is not None:
            content["error_code"] = kind.value
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with detailed information."""
        logger.error(f"Request validation error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Validation error", "errors": jsonable_errors(exc)},
        )

    return app


def jsonable_errors(exc: RequestValidationError):
    """Strip non-serialisable context from validation errors."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


app = create_app()
