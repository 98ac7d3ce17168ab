"""
Song API Routes.

WHAT: REST endpoints for the song catalog.

WHY: Routes stay thin so the same rules apply whether a song is
reached over HTTP or through the service in tests.

HOW: Routes bind query/path/body input, call SongService, and serialize
with the schemas in songlib.schemas.song. Errors are raised as
AppException subclasses and rendered by the registered exception handlers.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from songlib.core.deps import get_song_details_client, get_song_service
from songlib.models.song import Song
from songlib.schemas.song import (
    ErrorResponse,
    SongCreateRequest,
    SongResponse,
    SongUpdateRequest,
)
from songlib.services.song_details_client import SongDetailsClient
from songlib.services.song_service import SongService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/songs", tags=["songs"])


@router.get(
    "",
    response_model=List[SongResponse],
    responses={500: {"model": ErrorResponse}},
)
async def list_songs(
    group: Optional[str] = Query(None, description="Filter by exact group name"),
    title: Optional[str] = Query(None, alias="song", description="Filter by exact song title"),
    page: int = Query(0, ge=0, description="Page number (0 means 1)"),
    limit: int = Query(0, ge=0, description="Songs per page (0 means 10)"),
    service: SongService = Depends(get_song_service),
):
    """
    List songs.

    Filters are exact matches and are combined; leaving one out disables it.
    """
    logger.info(
        "Received request to get all songs",
        extra={"group": group, "song": title, "page": page, "limit": limit},
    )

    songs = await service.list_songs(group=group, title=title, page=page, limit=limit)
    return [SongResponse.from_model(song) for song in songs]


@router.get(
    "/{song_id}",
    response_model=SongResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_song(
    song_id: int = Path(..., gt=0, description="Song ID"),
    service: SongService = Depends(get_song_service),
):
    """Get a single song."""
    song = await service.get_song(song_id)
    return SongResponse.from_model(song)


@router.get(
    "/{song_id}/lyrics",
    response_model=List[str],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_song_lyrics(
    song_id: int = Path(..., gt=0, description="Song ID"),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Lines per page"),
    service: SongService = Depends(get_song_service),
):
    """
    Get one page of a song's lyrics.

    Lyrics are split on newlines. A page past the end is an empty list.
    """
    logger.info(
        "Received request to get song lyrics",
        extra={"song_id": song_id, "page": page, "limit": limit},
    )

    lyrics = await service.get_lyrics_page(song_id, page, limit)

    logger.info(
        f"Successfully retrieved {len(lyrics)} lyric lines",
        extra={"song_id": song_id},
    )
    return lyrics


@router.post(
    "",
    response_model=SongResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def create_song(
    request: SongCreateRequest,
    service: SongService = Depends(get_song_service),
    details_client: SongDetailsClient = Depends(get_song_details_client),
):
    """
    Create a song.

    Release date, lyrics and link are fetched from the song details API
    before the song is stored.
    """
    logger.info(
        "Received request to create a new song",
        extra={"group": request.group, "song": request.title},
    )

    detail = await details_client.fetch_details(request.group, request.title)

    song = await service.create_song(
        Song(
            group_name=request.group,
            title=request.title,
            release_date=detail.release_date,
            text=detail.text,
            link=detail.link,
        )
    )
    return SongResponse.from_model(song)


@router.put(
    "/{song_id}",
    response_model=SongResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_song(
    request: SongUpdateRequest,
    song_id: int = Path(..., gt=0, description="Song ID"),
    service: SongService = Depends(get_song_service),
):
    """
    Replace a song.

    This is a whole-record update; fields missing from the body are cleared.
    """
    logger.info("Received request to update song", extra={"song_id": song_id})

    song = await service.update_song(request.to_model(song_id))
    return SongResponse.from_model(song)


@router.delete(
    "/{song_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
async def delete_song(
    song_id: int = Path(..., gt=0, description="Song ID"),
    service: SongService = Depends(get_song_service),
):
    """Delete a song."""
    logger.info("Received request to delete song", extra={"song_id": song_id})

    await service.delete_song(song_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
