"""
Song details API client.

WHAT: Fetches release date, lyrics and link for a (group, song) pair from
the external song details API.

WHY: New songs are enriched from an upstream catalog instead of
asking clients to supply lyrics and release dates themselves.

HOW: One GET request per lookup with httpx:

    GET {api_url}?group=<group>&song=<title>
    200 -> {"releaseDate": "...", "text": "...", "link": "..."}
"""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from songlib.core.config import Settings
from songlib.core.exceptions import SongDetailsUnavailableError
from songlib.schemas.song import SongDetail

logger = logging.getLogger(__name__)


class SongDetailsClient:
    """
    Client for the external song details API.

    WHY: Wrapping the API in one class keeps its URL, timeout and error
    mapping in one place, and lets tests substitute a stub client.

    Attributes:
        api_url: Endpoint URL, without query string
        timeout: Request timeout in seconds
    """

    def __init__(self, api_url: str, timeout: float = 10.0):
        self.api_url = api_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SongDetailsClient":
        """Build a client from application settings."""
        return cls(
            api_url=settings.SONG_DETAILS_API_URL,
            timeout=settings.SONG_DETAILS_TIMEOUT,
        )

    async def fetch_details(self, group: str, title: str) -> SongDetail:
        """
        Look up a song's details.

        Args:
            group: Group name
            title: Song title

        Returns:
            SongDetail with release date, lyrics and link

        Raises:
            SongDetailsUnavailableError: If the API can't be reached, answers
                with a non-200 status, or returns an unusable body. For
                non-200 answers the upstream status code is kept.
        """
        params = {"group": group, "song": title}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.api_url, params=params)

        except httpx.TimeoutException as e:
            logger.error(f"Song details API timeout: {e}")
            raise SongDetailsUnavailableError(
                message="Song details API request timed out",
                timeout=self.timeout,
            ) from e

        except httpx.RequestError as e:
            logger.error(f"Failed to call song details API: {e}")
            raise SongDetailsUnavailableError(
                message="Failed to call external API",
                error=str(e),
            ) from e

        if response.status_code != 200:
            logger.error(
                f"Song details API returned an error: {response.status_code} - {response.text}"
            )
            raise SongDetailsUnavailableError(
                status_code=response.status_code,
                group=group,
                song=title,
            )

        try:
            return SongDetail.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Failed to decode song details API response: {e}")
            raise SongDetailsUnavailableError(
                message="Failed to decode external API response",
            ) from e
