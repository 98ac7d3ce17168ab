"""
Song Pydantic Schemas.

WHAT: Request/Response models for the song API endpoints.

WHY: The public field names differ from the column names; aliases
keep that mapping in the schema instead of in every route.

HOW: Field names on the wire follow the public API ("group", "song",
"releaseDate"); Python attributes use snake_case and map onto the Song
model columns.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from songlib.models.song import Song


class SongDetail(BaseModel):
    """
    Details returned by the external song details API.
    """

    model_config = ConfigDict(populate_by_name=True)

    release_date: str = Field(..., alias="releaseDate", description="Release date")
    text: str = Field(..., description="Lyrics, one verse line per newline")
    link: str = Field(..., description="External link")


# ============================================================================
# Request Schemas
# ============================================================================


class SongCreateRequest(BaseModel):
    """
    Request schema for creating a song.

    Only group and title are supplied; the rest is fetched from the song
    details API.
    """

    model_config = ConfigDict(populate_by_name=True)

    group: str = Field(..., min_length=1, max_length=255, description="Group name")
    title: str = Field(..., alias="song", min_length=1, max_length=255, description="Song title")


class SongUpdateRequest(BaseModel):
    """
    Request schema for replacing a song.

    Updates are whole-record: fields left out are stored as empty strings.
    """

    model_config = ConfigDict(populate_by_name=True)

    group: str = Field(..., min_length=1, max_length=255, description="Group name")
    title: str = Field(..., alias="song", min_length=1, max_length=255, description="Song title")
    release_date: str = Field("", alias="releaseDate", max_length=64, description="Release date")
    text: str = Field("", description="Lyrics")
    link: str = Field("", max_length=1024, description="External link")

    def to_model(self, song_id: int) -> Song:
        """Build the replacement Song for the given id."""
        return Song(
            id=song_id,
            group_name=self.group,
            title=self.title,
            release_date=self.release_date,
            text=self.text,
            link=self.link,
        )


# ============================================================================
# Response Schemas
# ============================================================================


class SongResponse(BaseModel):
    """
    Response schema for a song.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(None, description="Song ID")
    group: str = Field(..., description="Group name")
    title: str = Field(..., alias="song", description="Song title")
    release_date: str = Field("", alias="releaseDate", description="Release date")
    text: str = Field("", description="Lyrics")
    link: str = Field("", description="External link")

    @classmethod
    def from_model(cls, song: Song) -> "SongResponse":
        """Convert a Song model to its response schema."""
        return cls(
            id=song.id,
            group=song.group_name,
            title=song.title,
            release_date=song.release_date,
            text=song.text,
            link=song.link,
        )


class ErrorResponse(BaseModel):
    """Shape of every error body, for OpenAPI documentation."""

    error: str
    message: str
    status_code: int
    details: Optional[dict] = None
