"""
Outcome processing - applies one listener vote to all rating state.

Steps, in order:
1. Validate the outcome (both ids present, known, and different)
2. Row-lock both songs and snapshot their global ratings. Personal
   ratings seen for the first time are created here, from that snapshot
3. Compute and store new global ratings (previous rating kept for the delta)
4. Compute and store new personal ratings for the session, from the
   session's own ratings (so personal and global drift apart over time)
5. Tally the genres of both songs for the session
6. Append the pair to the session's recent history (bounded)
7. Append the vote to the audit log

Validation happens before anything is read under lock or written, so a
rejected outcome leaves no trace. Everything after validation happens in
the caller's transaction: the processor flushes but never commits. A
database error in steps 2-7 rolls the whole session back and surfaces as
StorageFailure, never as a partial success.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from songbattle.catalog.provider import Catalog
from songbattle.db.locks import acquire_session_lock
from songbattle.db.models import Song, Vote
from songbattle.elo.calculator import calculate
from songbattle.elo.constants import MatchmakingParams
from songbattle.errors import InvalidOutcome, StorageFailure
from songbattle.ratings.store import RatingStore
from songbattle.ratings.trackers import AffinityTracker, RecencyTracker

logger = logging.getLogger(__name__)


@dataclass
class OutcomeResult:
    """Public snapshot of the winning song after a vote."""
    song_id: int
    title: str
    new_rating: int
    rating_delta: int
    personal_rating: int

    def to_dict(self) -> dict:
        return {
            "newRating": self.new_rating,
            "ratingDelta": self.rating_delta,
        }


class OutcomeProcessor:
    """
    Records battle outcomes.

    Usage:
        processor = OutcomeProcessor(db)
        result = processor.record_outcome(session_id, winner_id=7, loser_id=12)
        db.commit()  # caller owns the transaction

        print(f"{result.title}: {result.new_rating} ({result.rating_delta:+d})")
    """

    def __init__(self, db: Session, params: Optional[MatchmakingParams] = None):
        self.db = db
        self.params = params or MatchmakingParams()
        self.catalog = Catalog(db)
        self.store = RatingStore(db, self.params.default_rating)
        self.recency = RecencyTracker(db, self.params.recency_capacity)
        self.affinity = AffinityTracker(db)

    def validate(self, winner_id: Optional[int], loser_id: Optional[int]) -> tuple[Song, Song]:
        """
        Check an outcome without touching any state.

        Returns:
            Tuple of (winner, loser) songs

        Raises:
            InvalidOutcome: Missing id, unknown id, or winner == loser
        """
        if winner_id is None or loser_id is None:
            raise InvalidOutcome("winnerId and loserId required")
        if winner_id == loser_id:
            raise InvalidOutcome(f"A song can't beat itself (id {winner_id})")

        winner = self.catalog.get_song(winner_id)
        if winner is None:
            raise InvalidOutcome(f"Unknown winner song id {winner_id}")
        loser = self.catalog.get_song(loser_id)
        if loser is None:
            raise InvalidOutcome(f"Unknown loser song id {loser_id}")

        return winner, loser

    def record_outcome(
        self,
        session_id: str,
        winner_id: Optional[int],
        loser_id: Optional[int],
    ) -> OutcomeResult:
        """
        Apply one vote to global and personal ratings and the session trackers.

        Args:
            session_id: Opaque session key supplied by the caller
            winner_id: Song the listener preferred
            loser_id: The other song

        Returns:
            OutcomeResult with the winner's new global rating and its delta

        Raises:
            InvalidOutcome: See validate(); nothing is written
            StorageFailure: A database error; the session is rolled back
        """
        try:
            winner, loser = self.validate(winner_id, loser_id)
        except InvalidOutcome as exc:
            logger.warning("Rejected outcome from session %s: %s", session_id, exc)
            raise
        except SQLAlchemyError as exc:
            # e.g. SQLite busy timeout while waiting for another writer
            raise self._storage_failure(exc, session_id, winner_id, loser_id) from exc

        k = self.params.k_factor
        try:
            # Same-session requests (double submits) queue up here
            acquire_session_lock(self.db, session_id)

            # Snapshot global ratings under row locks
            locked = self.store.lock_songs([winner.id, loser.id])
            winner, loser = locked[winner.id], locked[loser.id]

            # First contact: personal ratings start at the pre-vote global rating
            winner_personal, _ = self.store.ensure_personal_rating(session_id, winner.id)
            loser_personal, _ = self.store.ensure_personal_rating(session_id, loser.id)

            global_update = calculate(winner.rating, loser.rating, k)
            self.store.apply_global_update(winner.id, global_update.winner_after, won=True)
            self.store.apply_global_update(loser.id, global_update.loser_after, won=False)

            personal_update = calculate(winner_personal.rating, loser_personal.rating, k)
            self.store.apply_personal_update(session_id, winner.id, personal_update.winner_after, won=True)
            self.store.apply_personal_update(session_id, loser.id, personal_update.loser_after, won=False)

            self.affinity.record(session_id, winner.genre, loser.genre)
            self.recency.record(session_id, winner.id, loser.id)

            self.db.add(Vote(session_id=session_id, winner_id=winner.id, loser_id=loser.id))
            self.db.flush()
        except SQLAlchemyError as exc:
            raise self._storage_failure(exc, session_id, winner_id, loser_id) from exc

        result = OutcomeResult(
            song_id=winner.id,
            title=winner.title,
            new_rating=winner.rating,
            rating_delta=winner.rating - winner.previous_rating,
            personal_rating=personal_update.winner_after,
        )
        logger.info(
            "Session %s: %s beat %s, global %d -> %d, personal %d -> %d",
            session_id, winner.id, loser.id,
            global_update.winner_before, global_update.winner_after,
            personal_update.winner_before, personal_update.winner_after,
        )
        return result

    def _storage_failure(self, exc, session_id, winner_id, loser_id) -> StorageFailure:
        """Log, roll the session back, and wrap a database error."""
        logger.exception(
            "Storage failure recording %s beat %s for session %s",
            winner_id, loser_id, session_id,
        )
        self.db.rollback()
        return StorageFailure(f"Could not record outcome: {exc}")
