"""
Per-session bookkeeping updated on every recorded outcome.

- RecencyTracker: bounded FIFO of the pairs a session last voted on.
  Matchmaking uses it to avoid serving the same songs again straight away.
- AffinityTracker: win/comparison tally per genre. Purely observational,
  matchmaking never reads it; it feeds the /api/me/affinity report.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from songbattle.db.models import GenreAffinity, RecentPair
from songbattle.elo.constants import RECENCY_CAPACITY


class RecencyTracker:
    """
    Bounded history of recently contested pairs per session.

    At most `capacity` pairs are kept per session; recording one more
    evicts the oldest.
    """

    def __init__(self, db: Session, capacity: int = RECENCY_CAPACITY):
        self.db = db
        self.capacity = capacity

    def record(self, session_id: str, winner_id: int, loser_id: int) -> None:
        """Append a pair and evict anything beyond capacity."""
        self.db.add(RecentPair(session_id=session_id, winner_id=winner_id, loser_id=loser_id))
        self.db.flush()
        self._evict(session_id)

    def _evict(self, session_id: str) -> None:
        stale_ids = [
            row_id
            for (row_id,) in (
                self.db.query(RecentPair.id)
                .filter(RecentPair.session_id == session_id)
                .order_by(RecentPair.id.desc())
                .offset(self.capacity)
                .all()
            )
        ]
        if stale_ids:
            (
                self.db.query(RecentPair)
                .filter(RecentPair.id.in_(stale_ids))
                .delete(synchronize_session=False)
            )
            self.db.flush()

    def recent_pairs(self, session_id: str) -> list[tuple[int, int]]:
        """The session's remembered (winner_id, loser_id) pairs, oldest first."""
        rows = (
            self.db.query(RecentPair.winner_id, RecentPair.loser_id)
            .filter(RecentPair.session_id == session_id)
            .order_by(RecentPair.id.desc())
            .limit(self.capacity)
            .all()
        )
        return [(winner_id, loser_id) for winner_id, loser_id in reversed(rows)]

    def recent_song_ids(self, session_id: str) -> set[int]:
        """Every song id that appears in the session's remembered pairs."""
        return recently_contested(self.recent_pairs(session_id))


def recently_contested(pairs: list[tuple[int, int]]) -> set[int]:
    """Flatten pairs into the set of song ids they mention."""
    ids: set[int] = set()
    for song_a, song_b in pairs:
        ids.add(song_a)
        ids.add(song_b)
    return ids


class AffinityTracker:
    """Per-session win/comparison tally by genre."""

    def __init__(self, db: Session):
        self.db = db

    def _get_or_create(self, session_id: str, genre: str) -> GenreAffinity:
        record = (
            self.db.query(GenreAffinity)
            .filter(GenreAffinity.session_id == session_id, GenreAffinity.genre == genre)
            .first()
        )
        if record is None:
            record = GenreAffinity(session_id=session_id, genre=genre, wins=0, comparisons=0)
            self.db.add(record)
            self.db.flush()
        return record

    def record(
        self,
        session_id: str,
        winner_genre: Optional[str],
        loser_genre: Optional[str],
    ) -> None:
        """
        Tally one battle.

        The winner's genre gets a win and a comparison, the loser's genre a
        comparison only. Untagged (None or blank) genres are skipped.
        """
        if winner_genre and winner_genre.strip():
            record = self._get_or_create(session_id, winner_genre)
            record.wins += 1
            record.comparisons += 1

        if loser_genre and loser_genre.strip():
            record = self._get_or_create(session_id, loser_genre)
            record.comparisons += 1

        self.db.flush()

    def for_session(self, session_id: str) -> list[GenreAffinity]:
        """All genre tallies for a session, most comparisons first."""
        return (
            self.db.query(GenreAffinity)
            .filter(GenreAffinity.session_id == session_id)
            .order_by(GenreAffinity.comparisons.desc(), GenreAffinity.genre)
            .all()
        )
