"""
SQLAlchemy ORM models for SongBattle.

This module defines all database tables. The schema separates the
catalog-wide (global) rating, stored on the song itself, from the
per-session state that each listener builds up by voting.

Key design decisions:
- Global rating lives on the songs row so it can be row-locked for updates
- Personal ratings are created lazily, one row per (session, song)
- Recent pairs are a bounded FIFO per session (oldest rows deleted)
- Genre affinity is observational only, matchmaking never reads it
- Every vote is also appended to an audit log for stats

Tables:
- songs: Catalog entries and their global rating
- personal_ratings: Per-session rating per song
- recent_pairs: Last few battles each session voted on
- genre_affinities: Per-session win/comparison tally by genre
- votes: Append-only log of every recorded outcome
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from songbattle.elo.constants import DEFAULT_RATING


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# =============================================================================
# Catalog Models
# =============================================================================

class Song(Base):
    """
    A song in the battle catalog.

    Descriptive fields are set once when the catalog is seeded. The rating
    columns hold the global (everyone's) rating and are only changed by
    OutcomeProcessor.

    previous_rating is the rating before the most recent battle, kept so
    the last delta can be reported.
    """
    __tablename__ = "songs"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist: Mapped[str] = mapped_column(String(255), nullable=False)

    # Category tag for affinity tracking; untagged songs are skipped
    genre: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Media reference: YouTube video id plus where the clip should start
    youtube_id: Mapped[str] = mapped_column(String(20), nullable=False)
    start_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Global rating state
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_RATING)
    previous_rating: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_RATING)
    comparisons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        Index("idx_songs_rating", "rating"),
    )

    def to_dict(self) -> dict:
        """JSON-friendly representation used by the API."""
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "genre": self.genre,
            "youtube_id": self.youtube_id,
            "start_time": self.start_time,
            "rating": self.rating,
            "comparisons": self.comparisons,
            "wins": self.wins,
        }

    def __repr__(self) -> str:
        return f"<Song(id={self.id}, title='{self.title}', rating={self.rating})>"


# =============================================================================
# Per-Session Models
# =============================================================================

class PersonalRating(Base):
    """
    One session's rating for one song.

    Starts at the song's global rating at the moment of first contact
    (not a fixed constant), then moves only with this session's votes.
    """
    __tablename__ = "personal_ratings"

    id: Mapped[int] = mapped_column(primary_key=True)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    song_id: Mapped[int] = mapped_column(ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comparisons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    song: Mapped["Song"] = relationship()

    __table_args__ = (
        UniqueConstraint("session_id", "song_id", name="uq_personal_rating_session_song"),
        Index("idx_personal_ratings_session", "session_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<PersonalRating(session='{self.session_id}', song_id={self.song_id}, "
            f"rating={self.rating})>"
        )


class RecentPair(Base):
    """
    A battle a session recently voted on.

    Rows are ordered by id (insertion order). Only the newest
    recency_capacity rows per session are kept.
    """
    __tablename__ = "recent_pairs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    winner_id: Mapped[int] = mapped_column(ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    loser_id: Mapped[int] = mapped_column(ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_recent_pairs_session", "session_id", "id"),
    )

    def __repr__(self) -> str:
        return f"<RecentPair(session='{self.session_id}', pair=({self.winner_id}, {self.loser_id}))>"


class GenreAffinity(Base):
    """Per-session win/comparison tally for a genre."""
    __tablename__ = "genre_affinities"

    id: Mapped[int] = mapped_column(primary_key=True)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    genre: Mapped[str] = mapped_column(String(50), nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comparisons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("session_id", "genre", name="uq_genre_affinity_session_genre"),
    )

    @property
    def win_rate(self) -> float:
        if not self.comparisons:
            return 0.0
        return self.wins / self.comparisons

    def __repr__(self) -> str:
        return f"<GenreAffinity(session='{self.session_id}', genre='{self.genre}', {self.wins}/{self.comparisons})>"


# =============================================================================
# Audit Models
# =============================================================================

class Vote(Base):
    """
    Append-only record of every accepted outcome.

    Not read by the rating core; used for stats such as total battles.
    """
    __tablename__ = "votes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    winner_id: Mapped[int] = mapped_column(ForeignKey("songs.id"), nullable=False)
    loser_id: Mapped[int] = mapped_column(ForeignKey("songs.id"), nullable=False)
    voted_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_votes_voted_at", "voted_at"),
    )

    def __repr__(self) -> str:
        return f"<Vote(id={self.id}, winner_id={self.winner_id}, loser_id={self.loser_id})>"
