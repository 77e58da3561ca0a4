"""
Song catalog: seed data and read access.
"""

from songbattle.catalog.provider import Catalog, seed_catalog
from songbattle.catalog.seed import SEED_SONGS

__all__ = [
    "Catalog",
    "seed_catalog",
    "SEED_SONGS",
]
