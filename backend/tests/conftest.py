"""
Pytest configuration and fixtures.

Unit tests get an in-memory SQLite session; API tests get an httpx client
wired to an app whose database and song details client are replaced with
test doubles.
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from httpx import AsyncClient, ASGITransport

from songlib.core.config import Settings
from songlib.core.deps import get_song_details_client
from songlib.db.session import get_db
from songlib.main import create_app
from songlib.models import Base
from tests.fakes import InMemorySongStore, StubSongDetailsClient


# SQLite keeps tests free of an external database.
TEST_ASYNC_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an app under test; never read from the environment."""
    return Settings(
        _env_file=None,
        DATABASE_URL=TEST_ASYNC_DATABASE_URL,
        SONG_DETAILS_API_URL="http://song-details.test/info",
        LOG_FORMAT="text",
    )


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """
    Create a test database engine.

    Function scope gives every test an empty database.
    """
    engine = create_async_engine(TEST_ASYNC_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session.

    Yields:
        AsyncSession: Database session for the test
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def store() -> InMemorySongStore:
    """Empty in-memory song store."""
    return InMemorySongStore()


@pytest.fixture
def details_client() -> StubSongDetailsClient:
    """Song details client returning canned details."""
    return StubSongDetailsClient()


@pytest.fixture
def app(test_settings, db_session, details_client):
    """
    App under test.

    The request session is the test session, so data created through
    factories is visible to the API and vice versa.
    """
    application = create_app(test_settings)

    async def override_get_db():
        """Override database dependency with test session."""
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_song_details_client] = lambda: details_client

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test HTTP client.

    Yields:
        AsyncClient: HTTP client for making test requests
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sample_song_data() -> dict:
    """Song fields as stored on the model."""
    return {
        "group_name": "Muse",
        "title": "Supermassive Black Hole",
        "release_date": "16.07.2006",
        "text": "Ooh baby, don't you know I suffer?\nOoh baby, can you hear me moan?\n\nYou caught me under false pretenses",
        "link": "https://www.youtube.com/watch?v=Xsp3_a-PMTw",
    }
