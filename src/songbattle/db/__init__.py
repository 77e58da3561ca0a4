"""
Database module for SongBattle.

Provides SQLAlchemy ORM models, session management, and lock helpers.

Usage:
    from songbattle.db import get_session, Song

    with get_session() as session:
        songs = session.query(Song).all()
"""

from songbattle.db.models import (
    Base,
    GenreAffinity,
    PersonalRating,
    RecentPair,
    Song,
    Vote,
)
from songbattle.db.session import get_session, get_engine, SessionLocal

__all__ = [
    # Base
    "Base",
    # Models
    "Song",
    "PersonalRating",
    "RecentPair",
    "GenreAffinity",
    "Vote",
    # Session
    "get_session",
    "get_engine",
    "SessionLocal",
]
