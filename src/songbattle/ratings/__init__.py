"""
Rating state: global and per-session ratings plus per-session trackers.
"""

from songbattle.ratings.store import RatingStore
from songbattle.ratings.trackers import AffinityTracker, RecencyTracker, recently_contested

__all__ = [
    "RatingStore",
    "RecencyTracker",
    "AffinityTracker",
    "recently_contested",
]
