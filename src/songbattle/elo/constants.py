"""
ELO and matchmaking constants.

The values here are the built-in defaults. Runtime values come from
settings (see config.py) through MatchmakingParams.from_settings(), so
tests can inject their own parameters without touching the environment.
"""

from dataclasses import dataclass

# Starting rating for a song that has never been contested
DEFAULT_RATING = 1500

# K-factor: max rating movement per comparison. 32 keeps a catalog of a
# few dozen songs responsive without letting one vote swing it wildly.
DEFAULT_K_FACTOR = 32

# Spread factor: a 400 point gap means the favourite is expected to win
# ten times as often as the underdog
SPREAD = 400

# Matchmaking defaults
WILDCARD_PROBABILITY = 0.2
RATING_WINDOW = 150
WIDE_RATING_WINDOW = 300
RECENCY_CAPACITY = 10


@dataclass(frozen=True)
class MatchmakingParams:
    """
    All tunable rating/matchmaking knobs in one object.

    Passed to Matchmaker and OutcomeProcessor so the randomized policy
    can be exercised with deterministic values in tests.
    """
    default_rating: int = DEFAULT_RATING
    k_factor: int = DEFAULT_K_FACTOR
    wildcard_probability: float = WILDCARD_PROBABILITY
    rating_window: int = RATING_WINDOW
    wide_rating_window: int = WIDE_RATING_WINDOW
    recency_capacity: int = RECENCY_CAPACITY

    @classmethod
    def from_settings(cls, settings) -> "MatchmakingParams":
        """Build params from a Settings instance."""
        return cls(
            default_rating=settings.default_rating,
            k_factor=settings.k_factor,
            wildcard_probability=settings.wildcard_probability,
            rating_window=settings.rating_window,
            wide_rating_window=settings.wide_rating_window,
            recency_capacity=settings.recency_capacity,
        )
