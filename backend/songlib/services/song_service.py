"""
Song Catalog Service.

WHAT: Business logic for the song catalog: filtered listing, lyrics
pagination, and create/read/update/delete.

WHY: Validation and pagination rules live in one place, independent
of HTTP and of the database, so they can be tested without either.

HOW: The service depends only on the SongStore protocol, so it can run
against SongDAO in production and an in-memory store in tests. It keeps no
state between calls and never retries or swallows store errors.
"""

import logging
import re
from typing import List, Optional, Protocol

from songlib.core.exceptions import InvalidArgumentError, SongNotFoundError
from songlib.models.song import Song

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# songs.id is a 32-bit INTEGER column
MAX_SONG_ID = 2**31 - 1
# OFFSET and LIMIT are bound as signed 64-bit integers
MAX_ROW_COUNT = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class SongStore(Protocol):
    """Persistence operations the catalog service needs."""

    async def list_filtered(
        self, group: Optional[str], title: Optional[str], offset: int, limit: int,
    ) -> List[Song]: ...

    async def get_by_id(self, id: int) -> Optional[Song]: ...

    async def insert(self, song: Song) -> Song: ...

    async def replace(self, song: Song) -> Optional[Song]: ...

    async def delete_by_id(self, song_id: int) -> bool: ...


def parse_positive_int(value: Optional[str], parameter: str) -> int:
    """
    Parse a query-string integer that must be at least 1.

    Accepts an optional sign followed by ASCII digits, nothing else (no
    surrounding whitespace, no underscores).

    Raises:
        InvalidArgumentError: naming the parameter, if the value is missing,
            malformed, or below 1
    """
    if value is None or not _INTEGER_RE.fullmatch(value):
        raise InvalidArgumentError(parameter, value)

    number = int(value)
    if number < 1:
        raise InvalidArgumentError(parameter, value)
    return number


def paginate_lines(lines: List[str], page: int, limit: int) -> List[str]:
    """
    Return the 1-based page of lines, clipped to the end of the list.

    A page starting past the end is empty rather than an error.
    """
    start = (page - 1) * limit
    if start >= len(lines):
        return []
    return lines[start:start + limit]


class SongService:
    """
    Service for song catalog operations.
    """

    def __init__(self, store: SongStore):
        """
        Initialize SongService.

        Args:
            store: Song persistence (SongDAO or a substitute)
        """
        self.store = store

    async def list_songs(
        self,
        group: Optional[str] = None,
        title: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Song]:
        """
        List songs, optionally filtered by exact group and/or title.

        Args:
            group: Exact group name, empty or None for no filter
            title: Exact title, empty or None for no filter
            page: 1-based page number; 0 or None means the first page
            limit: Page size; 0 or None means 10

        Returns:
            Up to `limit` songs in ascending ID order

        Raises:
            InvalidArgumentError: If page or limit is negative
            StorageError: If the store fails
        """
        if page is not None and page < 0:
            raise InvalidArgumentError("page", page)
        if limit is not None and limit < 0:
            raise InvalidArgumentError("limit", limit)

        page = page or DEFAULT_PAGE
        limit = min(limit or DEFAULT_LIMIT, MAX_ROW_COUNT)
        offset = (page - 1) * limit

        if offset > MAX_ROW_COUNT:
            logger.info(f"Page {page} starts past the last possible row")
            return []

        return await self.store.list_filtered(group or "", title or "", offset, limit)

    def _check_song_id(self, song_id: Optional[int]) -> None:
        """
        Reject IDs the songs table can never hold.

        WHY: Such IDs would overflow the driver's integer binding and fail
        as a storage error, but no song can have them, so they are simply
        not found.
        """
        if song_id is None or not 0 < song_id <= MAX_SONG_ID:
            raise SongNotFoundError(song_id)

    async def get_song(self, song_id: int) -> Song:
        """
        Get a song by ID.

        Raises:
            SongNotFoundError: If no song has this ID
            StorageError: If the store fails
        """
        self._check_song_id(song_id)
        song = await self.store.get_by_id(song_id)
        if song is None:
            raise SongNotFoundError(song_id)
        return song

    async def get_lyrics_page(
        self,
        song_id: int,
        page: Optional[str],
        limit: Optional[str],
    ) -> List[str]:
        """
        Get one page of a song's lyric lines.

        The song is looked up first, so an unknown ID is reported as not
        found even when the pagination arguments are also bad.

        Args:
            song_id: Song ID
            page: 1-based page number, as received in the query string
            limit: Lines per page, as received in the query string

        Returns:
            The lines of the requested page (possibly empty)

        Raises:
            SongNotFoundError: If no song has this ID
            InvalidArgumentError: If page or limit isn't an integer >= 1
            StorageError: If the store fails
        """
        song = await self.get_song(song_id)

        page_number = parse_positive_int(page, "page")
        limit_number = parse_positive_int(limit, "limit")

        return paginate_lines(song.lyric_lines, page_number, limit_number)

    async def create_song(self, song: Song) -> Song:
        """
        Store a new, fully populated song.

        Returns:
            The song with its assigned ID

        Raises:
            StorageError: If the store fails
        """
        created = await self.store.insert(song)
        logger.info(f"Created song {created.id} ({created.group_name} - {created.title})")
        return created

    async def update_song(self, song: Song) -> Song:
        """
        Replace every field of an existing song.

        Args:
            song: New contents; song.id selects the song to replace

        Raises:
            SongNotFoundError: If no song has song.id
            StorageError: If the store fails
        """
        self._check_song_id(song.id)
        updated = await self.store.replace(song)
        if updated is None:
            raise SongNotFoundError(song.id)
        logger.info(f"Updated song {updated.id}")
        return updated

    async def delete_song(self, song_id: int) -> None:
        """
        Delete a song.

        Raises:
            SongNotFoundError: If no song has this ID
            StorageError: If the store fails
        """
        self._check_song_id(song_id)
        deleted = await self.store.delete_by_id(song_id)
        if not deleted:
            raise SongNotFoundError(song_id)
        logger.info(f"Deleted song {song_id}")
