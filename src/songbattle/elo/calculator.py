"""
ELO rating calculator for song battles.

Implements the standard logistic ELO formula:
  Expected score: E_W = 1 / (1 + 10^((R_L - R_W) / 400))
  New rating:     R'_W = R_W + K * (1 - E_W)
                  R'_L = R_L + K * (0 - E_L),  E_L = 1 - E_W

Ratings are stored as integers. All intermediate maths is float, and the
winner's and loser's new ratings are each rounded half away from zero on
their own. Because of that the two deltas are not always exact negatives
of each other.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from songbattle.elo.constants import DEFAULT_K_FACTOR, SPREAD


@dataclass
class EloUpdate:
    """
    Result of an ELO calculation for one battle.

    Contains everything needed to update storage and to explain
    what happened in the calculation.
    """
    winner_before: int
    loser_before: int
    winner_after: int
    loser_after: int

    # Pre-battle expected scores
    expected_win: float
    expected_lose: float

    k_factor: int

    @property
    def winner_change(self) -> int:
        """Rating change for the winner."""
        return self.winner_after - self.winner_before

    @property
    def loser_change(self) -> int:
        """Rating change for the loser."""
        return self.loser_after - self.loser_before

    @property
    def was_upset(self) -> bool:
        """Whether the lower-rated song won."""
        return self.winner_before < self.loser_before

    def __repr__(self) -> str:
        return (
            f"<EloUpdate(W: {self.winner_before} -> {self.winner_after}, "
            f"L: {self.loser_before} -> {self.loser_after}, k={self.k_factor})>"
        )


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    # Decimal's ROUND_HALF_UP rounds away from zero, unlike round()'s banker's rounding
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def expected_score(rating_a: float, rating_b: float) -> float:
    """
    Probability that a song rated rating_a beats one rated rating_b.

    Example:
        expected_score(1600, 1400)  # ~0.76
    """
    try:
        return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / SPREAD))
    except OverflowError:
        # Gap so large the underdog has effectively no chance
        return 0.0


def calculate(winner_rating: int, loser_rating: int, k: int = DEFAULT_K_FACTOR) -> EloUpdate:
    """
    Calculate new ratings for a decided battle, with all the details.

    Args:
        winner_rating: Winner's rating before the battle
        loser_rating: Loser's rating before the battle
        k: K-factor (how far ratings move)

    Returns:
        EloUpdate with before/after ratings and expected scores
    """
    expected_win = expected_score(winner_rating, loser_rating)
    expected_lose = 1.0 - expected_win

    new_winner = round_half_away(winner_rating + k * (1.0 - expected_win))
    new_loser = round_half_away(loser_rating + k * (0.0 - expected_lose))

    return EloUpdate(
        winner_before=winner_rating,
        loser_before=loser_rating,
        winner_after=new_winner,
        loser_after=new_loser,
        expected_win=expected_win,
        expected_lose=expected_lose,
        k_factor=k,
    )


def update_ratings(
    winner_rating: int,
    loser_rating: int,
    k: int = DEFAULT_K_FACTOR,
) -> tuple[int, int]:
    """
    Simple function to calculate new ELO ratings.

    For when you just need the new ratings without all the details.

    Example:
        update_ratings(1500, 1500)  # (1516, 1484)
        update_ratings(1600, 1400)  # (1608, 1392)

    Returns:
        Tuple of (new_winner_rating, new_loser_rating)
    """
    result = calculate(winner_rating, loser_rating, k)
    return result.winner_after, result.loser_after
