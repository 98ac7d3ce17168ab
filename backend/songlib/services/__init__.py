"""
Services package.

Business logic that sits between the API routes and the DAOs.
"""

from songlib.services.song_service import SongService, SongStore
from songlib.services.song_details_client import SongDetailsClient

__all__ = [
    "SongService",
    "SongStore",
    "SongDetailsClient",
]
