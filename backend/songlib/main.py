"""
Main FastAPI application.

WHAT: Entry point for the song library service. create_app() configures
logging, middleware, exception handlers, routes, and the database engine
lifecycle from an explicit Settings object.

WHY: A factory that takes its settings lets tests build an app
against SQLite without touching the environment or a module-level engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from songlib.api import songs
from songlib.core.config import Settings, get_settings
from songlib.core.exceptions import AppException
from songlib.core.exception_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)
from songlib.core.logging import setup_logging
from songlib.db.session import build_engine, build_session_factory
from songlib.middleware import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the database engine on startup and dispose of it on shutdown.
    """
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    logger.info(f"{settings.PROJECT_NAME} started")

    yield

    await engine.dispose()
    logger.info(f"{settings.PROJECT_NAME} shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings; loaded from the environment if omitted

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Song library: catalog of songs with paginated lyrics",
        version=settings.VERSION,
        docs_url="/swagger",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_middleware(RequestContextMiddleware)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        """
        Health check endpoint.

        Reports liveness only; it doesn't touch the database.
        """
        return {
            "status": "healthy",
            "version": settings.VERSION,
        }

    app.include_router(songs.router, prefix=settings.API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "songlib.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
