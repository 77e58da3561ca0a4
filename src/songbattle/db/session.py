"""
Database session management for SongBattle.

Provides SQLAlchemy engine and session factory with connection pooling
configured from config.py.

Usage:
    # As a context manager (recommended for scripts)
    from songbattle.db import get_session

    with get_session() as session:
        songs = session.query(Song).all()
        # Commits automatically on exit, rolls back on exception

    # As a dependency injection (for FastAPI)
    from songbattle.db.session import get_db

    @app.get("/songs")
    def list_songs(db: Session = Depends(get_db)):
        ...
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from songbattle.config import settings


def use_immediate_transactions(engine) -> None:
    """
    Make every SQLite transaction take the write lock at BEGIN.

    pysqlite normally defers BEGIN until the first INSERT/UPDATE, and SQLite
    ignores FOR UPDATE, so two transactions could both read a song's rating
    before either writes it. With BEGIN IMMEDIATE the second transaction
    waits (up to the busy timeout) until the first commits, then reads the
    committed values.
    """

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        # Stop pysqlite from issuing its own deferred BEGIN
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def get_engine(database_url: str | None = None):
    """
    Create SQLAlchemy engine.

    PostgreSQL gets a sized connection pool with pre-ping (handles stale
    connections). SQLite gets check_same_thread disabled because FastAPI
    runs sync endpoints in a threadpool, and immediate transactions (see
    use_immediate_transactions).
    """
    url = database_url or settings.database_url
    echo = settings.log_level == "DEBUG"  # Log SQL only in debug mode

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.sqlite_busy_timeout_seconds,
            },
            echo=echo,
        )
        use_immediate_transactions(engine)
        return engine

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=echo,
    )


# Singleton engine via module-level variable
_engine = None


def _get_engine():
    """Get or create the singleton engine instance."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return _engine


# Session factory - creates new sessions bound to our engine
SessionLocal = sessionmaker(
    autocommit=False,  # Commits are explicit
    autoflush=False,  # Writes are flushed explicitly by the services
    bind=_get_engine(),
)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Automatically commits on successful exit, rolls back on exception.

    Example:
        with get_session() as session:
            seed_catalog(session)

    Raises:
        Any exception from the database operation (after rollback)
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency injection function for FastAPI.

    Endpoints that write are responsible for calling db.commit().
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
