"""
Unit tests for OutcomeProcessor.

Tests the state transitions caused by one recorded vote:
- Global and personal ratings, counters and deltas
- Genre affinity, recency and vote log bookkeeping
- Rejected outcomes leave no trace
- Storage failures roll everything back
"""

import pytest
from sqlalchemy.exc import OperationalError

from songbattle.db.models import GenreAffinity, PersonalRating, RecentPair, Song, Vote
from songbattle.elo.constants import MatchmakingParams
from songbattle.errors import InvalidOutcome, StorageFailure
from songbattle.ratings.store import RatingStore
from songbattle.ratings.trackers import RecencyTracker
from songbattle.services.outcome import OutcomeProcessor


def _state_counts(session):
    return (
        session.query(PersonalRating).count(),
        session.query(RecentPair).count(),
        session.query(GenreAffinity).count(),
        session.query(Vote).count(),
    )


def _global_state(session):
    return [
        (song.id, song.rating, song.previous_rating, song.comparisons, song.wins)
        for song in session.query(Song).order_by(Song.id)
    ]


class TestRecordOutcome:

    @pytest.fixture
    def processor(self, seeded_session):
        return OutcomeProcessor(seeded_session)

    def test_returns_winner_snapshot(self, processor, seeded_session):
        result = processor.record_outcome("listener-a", 1, 2)
        seeded_session.commit()

        assert result.song_id == 1
        assert result.title == "Blinding Lights"
        assert result.new_rating == 1516
        assert result.rating_delta == 16
        assert result.to_dict() == {"newRating": 1516, "ratingDelta": 16}

    def test_global_counters(self, processor, seeded_session):
        processor.record_outcome("listener-a", 1, 2)
        seeded_session.commit()

        winner = seeded_session.get(Song, 1)
        loser = seeded_session.get(Song, 2)
        assert (winner.rating, winner.previous_rating, winner.comparisons, winner.wins) == (1516, 1500, 1, 1)
        assert (loser.rating, loser.previous_rating, loser.comparisons, loser.wins) == (1484, 1500, 1, 0)

    def test_delta_reflects_latest_battle(self, processor, seeded_session):
        processor.record_outcome("listener-a", 1, 2)
        result = processor.record_outcome("listener-a", 1, 3)

        # 1516 beats 1500: expected 0.523, gains round(32 * 0.477) = 15
        assert result.new_rating == 1531
        assert result.rating_delta == 15
        assert seeded_session.get(Song, 1).previous_rating == 1516

    def test_personal_ratings_start_from_pre_vote_global(self, processor, seeded_session):
        result = processor.record_outcome("listener-a", 1, 2)
        seeded_session.commit()

        store = RatingStore(seeded_session)
        assert store.personal_ratings_for("listener-a") == {1: 1516, 2: 1484}
        assert result.personal_rating == 1516

        winner_personal, created = store.ensure_personal_rating("listener-a", 1)
        assert not created
        assert (winner_personal.comparisons, winner_personal.wins) == (1, 1)

    def test_personal_and_global_diverge(self, processor, seeded_session):
        processor.record_outcome("listener-a", 1, 2)
        processor.record_outcome("listener-b", 2, 1)
        seeded_session.commit()

        store = RatingStore(seeded_session)

        # listener-b met the songs at 1516/1484; 1484 beating 1516 gains 17
        assert store.personal_ratings_for("listener-b") == {2: 1501, 1: 1499}
        # Global followed the same two votes
        assert store.get_global_rating(1) == 1499
        assert store.get_global_rating(2) == 1501
        # listener-a's view is untouched by listener-b's vote
        assert store.personal_ratings_for("listener-a") == {1: 1516, 2: 1484}

    def test_affinity_updated(self, processor, seeded_session):
        # Song 1 is Pop, song 15 is Hip-Hop
        processor.record_outcome("listener-a", 1, 15)
        seeded_session.commit()

        tally = {
            r.genre: (r.wins, r.comparisons)
            for r in seeded_session.query(GenreAffinity).filter_by(session_id="listener-a")
        }
        assert tally == {"Pop": (1, 1), "Hip-Hop": (0, 1)}

    def test_untagged_song_skips_affinity(self, processor, seeded_session):
        seeded_session.get(Song, 2).genre = None
        seeded_session.commit()

        processor.record_outcome("listener-a", 1, 2)

        tally = {r.genre: (r.wins, r.comparisons) for r in seeded_session.query(GenreAffinity)}
        assert tally == {"Pop": (1, 1)}

    def test_recency_holds_last_ten_of_fifteen(self, processor, seeded_session):
        pairs = [(i, i + 15) for i in range(1, 16)]
        for winner_id, loser_id in pairs:
            processor.record_outcome("listener-a", winner_id, loser_id)
        seeded_session.commit()

        assert RecencyTracker(seeded_session).recent_pairs("listener-a") == pairs[-10:]

    def test_vote_logged(self, processor, seeded_session):
        processor.record_outcome("listener-a", 4, 9)
        seeded_session.commit()

        vote = seeded_session.query(Vote).one()
        assert (vote.session_id, vote.winner_id, vote.loser_id) == ("listener-a", 4, 9)
        assert vote.voted_at is not None

    def test_custom_k_factor(self, seeded_session):
        processor = OutcomeProcessor(seeded_session, MatchmakingParams(k_factor=16))

        result = processor.record_outcome("listener-a", 1, 2)

        assert result.new_rating == 1508


class TestRejectedOutcomes:

    @pytest.mark.parametrize(
        "winner_id,loser_id",
        [(3, 3), (None, 2), (1, None), (None, None), (1, 9999), (9999, 1)],
    )
    def test_invalid_outcome_changes_nothing(self, seeded_session, winner_id, loser_id):
        processor = OutcomeProcessor(seeded_session)
        before_global = _global_state(seeded_session)

        with pytest.raises(InvalidOutcome):
            processor.record_outcome("listener-a", winner_id, loser_id)
        seeded_session.commit()

        assert _global_state(seeded_session) == before_global
        assert _state_counts(seeded_session) == (0, 0, 0, 0)


class TestStorageFailure:

    def test_failure_rolls_back_everything(self, seeded_session):
        processor = OutcomeProcessor(seeded_session)
        processor.record_outcome("listener-a", 1, 2)
        seeded_session.commit()
        before_global = _global_state(seeded_session)
        before_counts = _state_counts(seeded_session)

        def broken_recency(*args, **kwargs):
            raise OperationalError("INSERT INTO recent_pairs", {}, Exception("disk I/O error"))

        processor.recency.record = broken_recency

        with pytest.raises(StorageFailure):
            processor.record_outcome("listener-a", 3, 4)

        # Global and personal writes made before the failure are gone too
        assert _global_state(seeded_session) == before_global
        assert _state_counts(seeded_session) == before_counts

    def test_lock_timeout_during_validation_is_storage_failure(self, seeded_session):
        processor = OutcomeProcessor(seeded_session)

        def locked_catalog(song_id):
            raise OperationalError("SELECT songs", {}, Exception("database is locked"))

        processor.catalog.get_song = locked_catalog

        with pytest.raises(StorageFailure):
            processor.record_outcome("listener-a", 1, 2)

        assert _state_counts(seeded_session) == (0, 0, 0, 0)
