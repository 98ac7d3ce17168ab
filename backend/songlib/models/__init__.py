"""
Database models package.

Importing this package registers every model with Base.metadata, which
Alembic and the test fixtures rely on.
"""

from songlib.models.base import Base, TimestampMixin
from songlib.models.song import Song

__all__ = [
    "Base",
    "TimestampMixin",
    "Song",
]
