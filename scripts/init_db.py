#!/usr/bin/env python3
"""
Create the SongBattle tables (if missing) and seed the song catalog.

For production databases prefer `alembic upgrade head` followed by
this script with --no-create.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --no-create
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from songbattle.catalog.provider import seed_catalog
from songbattle.db.models import Base
from songbattle.db.session import get_engine, get_session
from songbattle.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create tables and seed the song catalog")
    parser.add_argument(
        "--no-create",
        action="store_true",
        help="Skip create_all (schema managed by Alembic)",
    )
    args = parser.parse_args()

    configure_logging()

    if not args.no_create:
        Base.metadata.create_all(get_engine())
        logger.info("Tables ready")

    with get_session() as session:
        inserted = seed_catalog(session)

    if inserted:
        print(f"Database initialized with {inserted} songs!")
    else:
        print("Catalog already seeded, nothing to do.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
