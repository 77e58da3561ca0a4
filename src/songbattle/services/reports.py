"""Read-only reports: leaderboards, overall stats, and genre affinity."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from songbattle.db.models import PersonalRating, Song, Vote
from songbattle.ratings.trackers import AffinityTracker

TOP_SONGS_LIMIT = 5


def _ranked(rows: list[dict], key: str) -> list[dict]:
    """
    Add a 'rank' to rows already sorted by `key` descending.

    Ties share a rank and the next rank skips, like SQL RANK().
    """
    ranked = []
    previous = None
    rank = 0
    for position, row in enumerate(rows, start=1):
        if row[key] != previous:
            rank = position
            previous = row[key]
        ranked.append({**row, "rank": rank})
    return ranked


def leaderboard(db: Session) -> list[dict]:
    """All songs ranked by global rating."""
    songs = db.query(Song).order_by(Song.rating.desc(), Song.id).all()
    rows = [
        {
            "id": song.id,
            "title": song.title,
            "artist": song.artist,
            "genre": song.genre,
            "rating": song.rating,
            "comparisons": song.comparisons,
            "wins": song.wins,
        }
        for song in songs
    ]
    return _ranked(rows, "rating")


def personal_leaderboard(db: Session, session_id: str) -> list[dict]:
    """Songs this session has rated, ranked by personal rating."""
    records = (
        db.query(PersonalRating, Song)
        .join(Song, PersonalRating.song_id == Song.id)
        .filter(PersonalRating.session_id == session_id)
        .order_by(PersonalRating.rating.desc(), Song.id)
        .all()
    )
    rows = [
        {
            "id": song.id,
            "title": song.title,
            "artist": song.artist,
            "genre": song.genre,
            "rating": personal.rating,
            "global_rating": song.rating,
            "comparisons": personal.comparisons,
            "wins": personal.wins,
        }
        for personal, song in records
    ]
    return _ranked(rows, "rating")


def stats(db: Session) -> dict:
    """Total battles recorded plus the top songs by global rating."""
    total = db.query(func.count(Vote.id)).scalar() or 0
    top = (
        db.query(Song)
        .order_by(Song.rating.desc(), Song.id)
        .limit(TOP_SONGS_LIMIT)
        .all()
    )
    return {
        "totalBattles": total,
        "topSongs": [
            {"title": song.title, "artist": song.artist, "rating": song.rating, "wins": song.wins}
            for song in top
        ],
    }


def affinity_report(db: Session, session_id: str) -> list[dict]:
    """A session's genre tallies with win rate."""
    return [
        {
            "genre": record.genre,
            "wins": record.wins,
            "comparisons": record.comparisons,
            "win_rate": round(record.win_rate, 4),
        }
        for record in AffinityTracker(db).for_session(session_id)
    ]
