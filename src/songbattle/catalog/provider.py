"""
Song catalog access.

The catalog is read-only to the rating core: songs are created once by
seed_catalog() and never deleted. Only OutcomeProcessor writes to the
rating columns.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from songbattle.catalog.seed import SEED_SONGS
from songbattle.db.models import Song

logger = logging.getLogger(__name__)


class Catalog:
    """
    Read-only view of the song catalog.

    Usage:
        catalog = Catalog(db)
        songs = catalog.list_songs()
        song = catalog.get_song(7)
    """

    def __init__(self, db: Session):
        self.db = db

    def list_songs(self) -> list[Song]:
        """All songs, ordered by id."""
        return self.db.query(Song).order_by(Song.id).all()

    def get_song(self, song_id: int) -> Optional[Song]:
        """Song by id, or None if it isn't in the catalog."""
        return self.db.get(Song, song_id)

    def count(self) -> int:
        return self.db.query(func.count(Song.id)).scalar() or 0


def seed_catalog(db: Session, songs: Iterable[dict] = SEED_SONGS) -> int:
    """
    Insert the seed songs if the catalog is empty.

    Existing catalogs are left alone so ratings are never reset.

    Returns:
        Number of songs inserted (0 if the catalog already had songs)
    """
    if Catalog(db).count() > 0:
        return 0

    inserted = 0
    for entry in songs:
        db.add(Song(**entry))
        inserted += 1
    db.flush()

    logger.info("Seeded catalog with %d songs", inserted)
    return inserted
