"""
FastAPI dependencies.

WHAT: Provide request handlers with settings, the catalog service, and the
song details client.

WHY: Routes declare what they need, and tests replace the database
or the song details API without patching modules.

HOW: Settings live on app.state (set by create_app), so every dependency
derives its configuration from the app instance rather than from a module
global. Tests swap any of these with app.dependency_overrides.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from songlib.core.config import Settings
from songlib.dao.song import SongDAO
from songlib.db.session import get_db
from songlib.services.song_details_client import SongDetailsClient
from songlib.services.song_service import SongService


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_song_service(session: AsyncSession = Depends(get_db)) -> SongService:
    """Catalog service bound to this request's database session."""
    return SongService(SongDAO(session))


def get_song_details_client(
    settings: Settings = Depends(get_app_settings),
) -> SongDetailsClient:
    """Client for the external song details API."""
    return SongDetailsClient.from_settings(settings)
