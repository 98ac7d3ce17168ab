"""
Data Access Object (DAO) package.
"""

from songlib.dao.base import BaseDAO
from songlib.dao.song import SongDAO

__all__ = [
    "BaseDAO",
    "SongDAO",
]
