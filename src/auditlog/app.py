"""FastAPI application factory with the request logger installed."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from auditlog.config import LogValuesFunc, Skipper
from auditlog.middleware import RequestLoggerMiddleware
from auditlog.routes import health
from auditlog.settings import Settings
from auditlog.sinks import structlog_sink

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log application startup and shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "api_startup",
        host=settings.host,
        port=settings.port,
        skip_paths=settings.skip_paths,
    )
    try:
        yield
    finally:
        logger.info("api_shutdown")


def create_app(
    settings: Settings | None = None,
    log_values_func: LogValuesFunc | None = None,
    skipper: Skipper | None = None,
) -> FastAPI:
    """Factory function to create a FastAPI application with request logging.

    Args:
        settings: Configuration instance. Creates default if None.
        log_values_func: Sink for request records. Logs via structlog if None.
        skipper: Optional predicate excluding requests from logging.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()
    if log_values_func is None:
        log_values_func = structlog_sink()

    app = FastAPI(
        title="auditlog",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    config = settings.logger_config(skipper=skipper, log_values_func=log_values_func)
    app.state.settings = settings
    app.state.logger_config = config

    app.add_middleware(RequestLoggerMiddleware, config=config)
    app.include_router(health.router)

    return app
