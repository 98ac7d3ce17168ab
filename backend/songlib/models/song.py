"""
Song Model.

WHAT: SQLAlchemy model for a catalog song.

WHY: Lyrics are stored as one text column and split on read, since
they are only ever served one page of lines at a time.

HOW: The request field "group" is stored in group_name and the request
field "song" in title. release_date, text and link come from the external
song details API when the song is created.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from songlib.models.base import Base, TimestampMixin


class Song(Base, TimestampMixin):
    """
    Catalog song record.

    id is assigned by the database on insert and never changes afterwards;
    an instance whose id is None has not been saved yet.
    """

    __tablename__ = "songs"

    id: Mapped[Optional[int]] = mapped_column(Integer, primary_key=True)
    group_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    release_date: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    # Newline-delimited verses
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    link: Mapped[str] = mapped_column(String(1024), nullable=False, default="")

    __table_args__ = (
        Index("ix_songs_group_name", "group_name"),
        Index("ix_songs_title", "title"),
    )

    @property
    def lyric_lines(self) -> list:
        """Lyrics split on newlines; blank lines are kept as empty strings."""
        return (self.text or "").split("\n")

    def __repr__(self) -> str:
        return f"<Song(id={self.id}, group={self.group_name!r}, title={self.title!r})>"
