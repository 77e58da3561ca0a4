"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from songbattle.catalog.provider import seed_catalog
from songbattle.db.models import Base, Song


@pytest.fixture
def test_engine():
    """
    Create a fresh in-memory SQLite database for a test.

    StaticPool keeps a single connection so every session (including
    the ones FastAPI opens on other threads) sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    """A session on the empty test database."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded_session(db_session):
    """A session on a database holding the 30 seed songs, all at 1500."""
    seed_catalog(db_session)
    db_session.commit()
    return db_session


def make_song(song_id: int, rating: int = 1500, genre: str | None = "Pop") -> Song:
    """Detached Song for tests that don't need a database."""
    return Song(
        id=song_id,
        title=f"Song {song_id}",
        artist=f"Artist {song_id}",
        genre=genre,
        youtube_id=f"yt{song_id}",
        start_time=0,
        rating=rating,
        previous_rating=rating,
        comparisons=0,
        wins=0,
    )


@pytest.fixture
def song_factory():
    return make_song
