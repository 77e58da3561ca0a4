"""
Matchmaking: choose which two songs a session hears next.
"""

from songbattle.matchmaking.matchmaker import Battle, Matchmaker

__all__ = [
    "Battle",
    "Matchmaker",
]
