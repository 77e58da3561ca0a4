"""
Rating storage for global and personal (per-session) ratings.

Global ratings live on the songs row and are shared by every session.
Personal ratings are one row per (session, song) and are created lazily
the first time a session's vote involves that song.

Lazy creation is explicit: ensure_personal_rating() is a get-or-create
that reports whether it wrote, so the write-on-read is visible to callers
and testable. Matchmaking reads personal ratings through
personal_ratings_for(), which never creates anything.

All writes are flushed into the caller's transaction. The caller commits.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session

from songbattle.db.models import PersonalRating, Song
from songbattle.elo.constants import DEFAULT_RATING


class RatingStore:
    """
    Get-or-default and update operations for both rating scopes.

    Usage:
        store = RatingStore(db)
        store.lock_songs([winner_id, loser_id])
        rating = store.get_global_rating(winner_id)
        store.apply_global_update(winner_id, 1516, won=True)
        db.commit()
    """

    def __init__(self, db: Session, default_rating: int = DEFAULT_RATING):
        self.db = db
        self.default_rating = default_rating

    # ------------------------------------------------------------------
    # Global scope
    # ------------------------------------------------------------------

    def lock_songs(self, song_ids: Iterable[int]) -> dict[int, Song]:
        """
        Row-lock the given songs for the rest of the transaction.

        Rows are locked in ascending id order so two outcomes touching the
        same pair of songs can't deadlock. populate_existing() makes sure the
        identity map reflects the values read under the lock. SQLite drops
        the FOR UPDATE clause; there the engine opens every transaction with
        BEGIN IMMEDIATE (see db.session.use_immediate_transactions), so the
        write lock is already held by the time this runs.

        Returns:
            Dict of song_id -> Song for the ids that exist
        """
        ids = sorted(set(song_ids))
        if not ids:
            return {}
        rows = (
            self.db.query(Song)
            .filter(Song.id.in_(ids))
            .order_by(Song.id)
            .with_for_update()
            .populate_existing()
            .all()
        )
        return {song.id: song for song in rows}

    def get_global_rating(self, song_id: int) -> int:
        """Current global rating, or the default for a song with no record."""
        song = self.db.get(Song, song_id)
        if song is None or song.rating is None:
            return self.default_rating
        return song.rating

    def apply_global_update(self, song_id: int, new_rating: int, won: bool) -> Song:
        """
        Store a new global rating for one song after a battle.

        The old rating is kept in previous_rating before being overwritten,
        the comparison count goes up by one, and wins goes up by one if
        this song won.

        Raises:
            ValueError: If the song does not exist
        """
        song = self.db.get(Song, song_id)
        if song is None:
            raise ValueError(f"Unknown song id {song_id}")

        song.previous_rating = song.rating
        song.rating = new_rating
        song.comparisons += 1
        if won:
            song.wins += 1

        self.db.flush()
        return song

    # ------------------------------------------------------------------
    # Personal scope
    # ------------------------------------------------------------------

    def _find_personal(self, session_id: str, song_id: int) -> PersonalRating | None:
        return (
            self.db.query(PersonalRating)
            .filter(
                PersonalRating.session_id == session_id,
                PersonalRating.song_id == song_id,
            )
            .first()
        )

    def ensure_personal_rating(self, session_id: str, song_id: int) -> tuple[PersonalRating, bool]:
        """
        Get a session's rating record for a song, creating it if needed.

        A new record starts at the song's current global rating, so personal
        ratings begin in line with everyone else and drift from there.

        Returns:
            Tuple of (record, created). created is False when the record
            already existed and nothing was written.
        """
        record = self._find_personal(session_id, song_id)
        if record is not None:
            return record, False

        record = PersonalRating(
            session_id=session_id,
            song_id=song_id,
            rating=self.get_global_rating(song_id),
            comparisons=0,
            wins=0,
        )
        self.db.add(record)
        self.db.flush()
        return record, True

    def get_personal_rating(self, session_id: str, song_id: int) -> int:
        """Personal rating for a song, initialised from the global rating on first use."""
        record, _ = self.ensure_personal_rating(session_id, song_id)
        return record.rating

    def personal_ratings_for(self, session_id: str) -> dict[int, int]:
        """All existing personal ratings for a session. Read only."""
        rows = (
            self.db.query(PersonalRating.song_id, PersonalRating.rating)
            .filter(PersonalRating.session_id == session_id)
            .all()
        )
        return {song_id: rating for song_id, rating in rows}

    def apply_personal_update(
        self,
        session_id: str,
        song_id: int,
        new_rating: int,
        won: bool,
    ) -> PersonalRating:
        """Store a new personal rating and bump the session's counters for the song."""
        record, _ = self.ensure_personal_rating(session_id, song_id)
        record.rating = new_rating
        record.comparisons += 1
        if won:
            record.wins += 1

        self.db.flush()
        return record
