"""
Test doubles.

InMemorySongStore satisfies the SongStore protocol with a dict, which lets
service tests run without a database. StubSongDetailsClient replaces the
external song details API in API tests.
"""

from typing import Dict, List, Optional, Tuple

from songlib.core.exceptions import StorageError
from songlib.models.song import Song
from songlib.schemas.song import SongDetail
from songlib.services.song_details_client import SongDetailsClient

SONG_FIELDS = ("group_name", "title", "release_date", "text", "link")


def _copy(song: Song) -> Song:
    return Song(id=song.id, **{field: getattr(song, field) for field in SONG_FIELDS})


class InMemorySongStore:
    """
    Dict-backed song store.

    Stored songs are copies, so callers can't mutate the store by holding
    on to a returned instance. Set `fail_with` to make every call raise.
    """

    def __init__(self):
        self.songs: Dict[int, Song] = {}
        self.next_id = 1
        self.fail_with: Optional[Exception] = None
        self.list_calls: List[Tuple[str, str, int, int]] = []

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def list_filtered(self, group, title, offset, limit) -> List[Song]:
        self._check()
        self.list_calls.append((group, title, offset, limit))
        matches = [
            song
            for song_id, song in sorted(self.songs.items())
            if (not group or song.group_name == group) and (not title or song.title == title)
        ]
        return [_copy(song) for song in matches[offset:offset + limit]]

    async def get_by_id(self, id: int) -> Optional[Song]:
        self._check()
        song = self.songs.get(id)
        return _copy(song) if song is not None else None

    async def insert(self, song: Song) -> Song:
        self._check()
        song.id = self.next_id
        self.next_id += 1
        self.songs[song.id] = _copy(song)
        return song

    async def replace(self, song: Song) -> Optional[Song]:
        self._check()
        if song.id not in self.songs:
            return None
        self.songs[song.id] = _copy(song)
        return _copy(song)

    async def delete_by_id(self, song_id: int) -> bool:
        self._check()
        return self.songs.pop(song_id, None) is not None


def failing_store() -> InMemorySongStore:
    """Store whose every operation raises StorageError."""
    store = InMemorySongStore()
    store.fail_with = StorageError(message="database is down", operation="test")
    return store


class StubSongDetailsClient(SongDetailsClient):
    """
    Song details client that never leaves the process.

    Returns `detail` for every lookup, or raises `error` when set. Lookups
    are recorded in `calls`.
    """

    def __init__(self, detail: Optional[SongDetail] = None):
        super().__init__(api_url="http://song-details.test/info")
        self.detail = detail or SongDetail(
            release_date="16.07.2006",
            text="Ooh baby, don't you know I suffer?\nOoh baby, can you hear me moan?",
            link="https://www.youtube.com/watch?v=Xsp3_a-PMTw",
        )
        self.error: Optional[Exception] = None
        self.calls: List[Tuple[str, str]] = []

    async def fetch_details(self, group: str, title: str) -> SongDetail:
        self.calls.append((group, title))
        if self.error is not None:
            raise self.error
        return self.detail
