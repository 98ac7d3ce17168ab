"""Pydantic schemas for request/response validation"""

from songlib.schemas.song import (
    SongDetail,
    SongCreateRequest,
    SongUpdateRequest,
    SongResponse,
    ErrorResponse,
)

__all__ = [
    "SongDetail",
    "SongCreateRequest",
    "SongUpdateRequest",
    "SongResponse",
    "ErrorResponse",
]
