"""
ELO rating system module.

Implements the song battle rating rule:
- Logistic expected score on a 400 point spread
- Integer ratings, each side rounded independently
- Tunable K-factor and matchmaking knobs via MatchmakingParams
"""

from songbattle.elo.calculator import EloUpdate, calculate, expected_score, update_ratings
from songbattle.elo.constants import DEFAULT_K_FACTOR, DEFAULT_RATING, MatchmakingParams

__all__ = [
    "EloUpdate",
    "calculate",
    "expected_score",
    "update_ratings",
    "DEFAULT_K_FACTOR",
    "DEFAULT_RATING",
    "MatchmakingParams",
]
