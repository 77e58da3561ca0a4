"""
Services layer for SongBattle.

Provides:
- OutcomeProcessor: applies a vote to global/personal ratings and trackers
- Reports: leaderboards, overall stats, and genre affinity

Usage:
    from songbattle.services import OutcomeProcessor

    with get_session() as session:
        result = OutcomeProcessor(session).record_outcome(session_id, 7, 12)
"""

from songbattle.services.outcome import OutcomeProcessor, OutcomeResult
from songbattle.services.reports import (
    affinity_report,
    leaderboard,
    personal_leaderboard,
    stats,
)

__all__ = [
    "OutcomeProcessor",
    "OutcomeResult",
    "affinity_report",
    "leaderboard",
    "personal_leaderboard",
    "stats",
]
