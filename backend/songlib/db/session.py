"""
Database session management.

WHAT: Builds the async engine and session factory from settings, and
provides the per-request session dependency.

WHY: One session per request gives each request its own transaction,
committed or rolled back as a unit.

HOW: create_app() builds both during the FastAPI lifespan and keeps them
on app.state, so nothing is connected at import time and each app instance
owns its own pool.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from songlib.core.config import Settings
from songlib.core.exceptions import StorageError

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    pool_pre_ping recycles stale connections. SQLite URLs (used in
    development and tests) don't accept pool sizing arguments.
    """
    url = settings.async_database_url
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=settings.DEBUG)

    return create_async_engine(
        url,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create the session factory.

    expire_on_commit=False keeps loaded songs usable after the commit that
    ends the request.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get database session.

    The session is committed when the route finishes without error and
    rolled back otherwise.

    WHY: DAO calls only flush, so the commit is the last point where the
    database can reject the request's writes. A failure there is reported
    as StorageError like any other database failure.

    Yields:
        AsyncSession: Database session for the request

    Raises:
        StorageError: If the commit fails
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

        try:
            await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Commit failed: {e}")
            await session.rollback()
            raise StorageError(
                message="Failed to commit transaction",
                operation="commit",
            ) from e
