"""
SongBattle - Head-to-head song rankings

Pairs two songs, records which one the listener prefers, and keeps an
ELO rating per song so later pairings stay competitive.

Main components:
- elo: ELO rating calculation
- ratings: Global and per-session rating storage, recency and genre trackers
- matchmaking: Pair selection for the next battle
- services: Outcome recording and reporting
- catalog: Song catalog and seed data
- web: FastAPI JSON API
"""

__version__ = "1.0.0"
