"""Database package"""

from songlib.db.session import build_engine, build_session_factory, get_db
from songlib.models.base import Base

__all__ = ["Base", "build_engine", "build_session_factory", "get_db"]
