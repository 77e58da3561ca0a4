"""
Unit tests for the ELO calculator.

Tests the core rating rule to ensure:
- Known inputs give the exact documented outputs
- Favorites winning gain less than underdogs winning
- Winner and loser are rounded independently (half away from zero)
- Extreme rating gaps don't blow up
"""

import pytest

from songbattle.elo.calculator import (
    calculate,
    expected_score,
    round_half_away,
    update_ratings,
)
from songbattle.elo.constants import DEFAULT_K_FACTOR, MatchmakingParams


class TestUpdateRatings:
    """Tests for the update_ratings convenience function."""

    def test_equal_ratings(self):
        """Evenly matched songs move 16 points each way at k=32."""
        assert update_ratings(1500, 1500, 32) == (1516, 1484)

    def test_favorite_wins(self):
        """
        1600 beats 1400: expected win ~0.7597, so the favorite
        gains round(32 * 0.2403) = 8 points.
        """
        assert update_ratings(1600, 1400, 32) == (1608, 1392)

    def test_default_k_is_32(self):
        assert DEFAULT_K_FACTOR == 32
        assert update_ratings(1500, 1500) == (1516, 1484)

    def test_underdog_gains_more_than_favorite(self):
        favorite_new, _ = update_ratings(1600, 1400)
        underdog_new, _ = update_ratings(1400, 1600)

        assert favorite_new - 1600 < underdog_new - 1400
        assert underdog_new - 1400 == 24

    def test_sides_rounded_independently(self):
        """
        At k=33 both deltas are exactly 16.5. Rounding each side half away
        from zero gives +17 for the winner but only -16 for the loser
        (1483.5 rounds up to 1484), so the deltas are not exact negatives.
        """
        new_winner, new_loser = update_ratings(1500, 1500, 33)

        assert new_winner == 1517
        assert new_loser == 1484
        assert (new_winner - 1500) + (new_loser - 1500) == 1

    @pytest.mark.parametrize(
        "winner,loser",
        [(1500, 1500), (1200, 1800), (1800, 1200), (0, 0), (-300, 400), (3000, 100)],
    )
    def test_winner_never_loses_points(self, winner, loser):
        new_winner, new_loser = update_ratings(winner, loser, 32)

        assert new_winner >= winner
        assert new_loser <= loser

    def test_huge_gap_does_not_overflow(self):
        """A favorite 1,000,000 points ahead gains nothing; the underdog gains the full k."""
        assert update_ratings(1_000_000, 0, 32) == (1_000_000, 0)
        assert update_ratings(0, 1_000_000, 32) == (32, 1_000_000 - 32)


class TestCalculate:
    """Tests for the detailed calculate() result."""

    def test_expected_scores_sum_to_one(self):
        result = calculate(1650, 1500)

        assert result.expected_win + result.expected_lose == pytest.approx(1.0)
        assert result.expected_win > 0.5

    def test_changes_and_upset(self):
        favorite = calculate(1800, 1600)
        assert favorite.winner_change > 0
        assert favorite.loser_change < 0
        assert not favorite.was_upset

        upset = calculate(1600, 1800)
        assert upset.was_upset
        assert upset.winner_change > favorite.winner_change

    def test_k_factor_recorded(self):
        assert calculate(1500, 1500, k=16).k_factor == 16
        assert calculate(1500, 1500, k=16).winner_after == 1508


class TestHelpers:
    def test_expected_score_symmetry(self):
        assert expected_score(1500, 1500) == pytest.approx(0.5)
        assert expected_score(1600, 1400) == pytest.approx(0.7597, abs=1e-4)
        assert expected_score(1600, 1400) + expected_score(1400, 1600) == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (-2.5, -3), (1483.5, 1484), (1516.4999, 1516), (-0.4, 0), (7.0, 7)],
    )
    def test_round_half_away(self, value, expected):
        assert round_half_away(value) == expected

    def test_params_from_settings(self):
        class FakeSettings:
            default_rating = 1200
            k_factor = 24
            wildcard_probability = 0.5
            rating_window = 100
            wide_rating_window = 250
            recency_capacity = 4

        params = MatchmakingParams.from_settings(FakeSettings())

        assert params == MatchmakingParams(1200, 24, 0.5, 100, 250, 4)
