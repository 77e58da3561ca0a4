"""
Matchmaker - picks the two songs for a session's next battle.

The policy balances three things:
- Fairness: opponents are close in rating, so every vote is informative
- Freshness: songs from the session's recent battles are avoided
- Exploration: some pairings are completely random, so every song keeps
  circulating and ratings can't settle into a closed loop

Algorithm:
1. Wildcard: with probability `wildcard_probability` pick any two songs.
2. Drop songs seen in the session's recent pairs. If that leaves fewer
   than two, use the whole catalog again (recency is a soft preference).
3. Pick a random seed song. Its effective rating is the session's
   personal rating if one exists, otherwise the global rating.
4. Opponents within `rating_window` of the seed.
5. If none, widen to `wide_rating_window`.
6. If still none, any other available song.
7. Random opponent from that set.
8. Random left/right order.

Each tier is a superset of the one before, so a pair is always produced
whenever the catalog has at least two songs.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping, NamedTuple, Optional, Sequence

from sqlalchemy.orm import Session

from songbattle.catalog.provider import Catalog
from songbattle.db.models import Song
from songbattle.elo.constants import MatchmakingParams
from songbattle.errors import InsufficientCatalog
from songbattle.ratings.store import RatingStore
from songbattle.ratings.trackers import RecencyTracker, recently_contested

logger = logging.getLogger(__name__)


class Battle(NamedTuple):
    """A pair of songs to show side by side. Side carries no meaning."""
    left: Song
    right: Song
    # 'wildcard', 'close', 'wide' or 'any' - which tier produced the pair
    tier: str


class Matchmaker:
    """
    Selects pairs of songs for a session.

    Usage:
        matchmaker = Matchmaker(params, rng=random.Random(42))
        battle = matchmaker.select_pair(songs, personal_ratings, recent_pairs)

        # Or straight from the database:
        battle = matchmaker.pair_for_session(db, session_id)
    """

    def __init__(
        self,
        params: Optional[MatchmakingParams] = None,
        rng: Optional[random.Random] = None,
    ):
        self.params = params or MatchmakingParams()
        self.rng = rng or random.Random()

    def effective_rating(self, song: Song, personal_ratings: Mapping[int, int]) -> int:
        """Personal rating if the session has one, else the global rating."""
        if song.id in personal_ratings:
            return personal_ratings[song.id]
        if song.rating is None:
            return self.params.default_rating
        return song.rating

    def select_pair(
        self,
        songs: Sequence[Song],
        personal_ratings: Optional[Mapping[int, int]] = None,
        recent_pairs: Sequence[tuple[int, int]] = (),
    ) -> Battle:
        """
        Pick two distinct songs for the next battle.

        Args:
            songs: Full catalog
            personal_ratings: song_id -> this session's rating (may be empty)
            recent_pairs: This session's last pairs, as (song_id, song_id)

        Returns:
            Battle with two different songs in random left/right order

        Raises:
            InsufficientCatalog: If the catalog has fewer than two songs
        """
        if len(songs) < 2:
            raise InsufficientCatalog(len(songs))

        personal_ratings = personal_ratings or {}

        if self.rng.random() < self.params.wildcard_probability:
            first, second = self.rng.sample(list(songs), 2)
            logger.debug("Wildcard battle: %s vs %s", first.id, second.id)
            return self._order(first, second, "wildcard")

        recent_ids: set[int] = set()
        if self.params.recency_capacity > 0:
            recent_ids = recently_contested(list(recent_pairs)[-self.params.recency_capacity:])
        available = [song for song in songs if song.id not in recent_ids]
        if len(available) < 2:
            available = list(songs)

        seed = self.rng.choice(available)
        seed_rating = self.effective_rating(seed, personal_ratings)
        others = [song for song in available if song.id != seed.id]

        tier = "close"
        candidates = self._within(others, seed_rating, self.params.rating_window, personal_ratings)
        if not candidates:
            tier = "wide"
            candidates = self._within(others, seed_rating, self.params.wide_rating_window, personal_ratings)
        if not candidates:
            tier = "any"
            candidates = others

        opponent = self.rng.choice(candidates)
        logger.debug(
            "Battle (%s): seed %s (%d) vs %s from %d candidates",
            tier, seed.id, seed_rating, opponent.id, len(candidates),
        )
        return self._order(seed, opponent, tier)

    def _within(
        self,
        songs: Sequence[Song],
        seed_rating: int,
        window: int,
        personal_ratings: Mapping[int, int],
    ) -> list[Song]:
        return [
            song for song in songs
            if abs(self.effective_rating(song, personal_ratings) - seed_rating) <= window
        ]

    def _order(self, first: Song, second: Song, tier: str) -> Battle:
        if self.rng.random() < 0.5:
            first, second = second, first
        return Battle(left=first, right=second, tier=tier)

    def pair_for_session(self, db: Session, session_id: str) -> Battle:
        """Load catalog, personal ratings and recent pairs for a session, then select."""
        songs = Catalog(db).list_songs()
        personal = RatingStore(db, self.params.default_rating).personal_ratings_for(session_id)
        recent = RecencyTracker(db, self.params.recency_capacity).recent_pairs(session_id)
        return self.select_pair(songs, personal, recent)
