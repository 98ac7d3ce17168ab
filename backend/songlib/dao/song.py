"""
Song Data Access Object (DAO).

WHAT: Database operations for the Song model.

WHY: Keeping queries here lets SongService stay free of
SQLAlchemy and run against any store with the same methods.

HOW: Extends BaseDAO and exposes the store operations the catalog service
depends on (see songlib.services.song_service.SongStore):
- list_filtered: exact-match filters on group and title, offset pagination
- get_by_id: lookup by primary key
- insert: persist a new song and return it with its assigned ID
- replace: whole-record update of an existing song
- delete_by_id: hard delete
"""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from songlib.dao.base import BaseDAO
from songlib.models.song import Song

# Columns overwritten by replace(); id and timestamps are managed by the store.
REPLACEABLE_FIELDS = ("group_name", "title", "release_date", "text", "link")


class SongDAO(BaseDAO[Song]):
    """
    Data Access Object for Song model.
    """

    def __init__(self, session: AsyncSession):
        """Initialize SongDAO."""
        super().__init__(Song, session)

    async def list_filtered(
        self,
        group: Optional[str],
        title: Optional[str],
        offset: int,
        limit: int,
    ) -> List[Song]:
        """
        List songs matching the given group and title exactly.

        An empty or missing filter is not applied. Songs come back in
        ascending ID order.

        Args:
            group: Group name to match, or empty for any group
            title: Song title to match, or empty for any title
            offset: Number of songs to skip
            limit: Maximum number of songs to return

        Returns:
            List of matching songs
        """
        filters = {}
        if group:
            filters["group_name"] = group
        if title:
            filters["title"] = title

        return await self.get_all(skip=offset, limit=limit, **filters)

    async def insert(self, song: Song) -> Song:
        """
        Insert a new song.

        Returns:
            The same instance, with its database-assigned id loaded
        """
        return await self.add(song)

    async def replace(self, song: Song) -> Optional[Song]:
        """
        Overwrite every content field of the song with song.id.

        Args:
            song: Song carrying the id to update and its new contents

        Returns:
            The stored song after the update, or None if no song has that id
        """
        existing = await self.get_by_id(song.id)
        if existing is None:
            return None

        for field in REPLACEABLE_FIELDS:
            setattr(existing, field, getattr(song, field))

        async with self._storage_errors("update"):
            await self.session.flush()
            await self.session.refresh(existing)
        return existing

    async def delete_by_id(self, song_id: int) -> bool:
        """
        Delete a song.

        Returns:
            True if the song existed and was deleted, False otherwise
        """
        return await self.delete(song_id)
