"""Transaction-scoped lock helpers for serializing per-session writes."""

from __future__ import annotations

import hashlib

from sqlalchemy import text
from sqlalchemy.orm import Session


def advisory_lock_key(name: str) -> int:
    """Return a deterministic signed 64-bit lock key from a session id or name."""
    digest = hashlib.sha256(name.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big", signed=True)


def acquire_session_lock(db: Session, session_id: str) -> bool:
    """
    Block until this transaction holds the lock for session_id.

    On PostgreSQL this takes pg_advisory_xact_lock, released automatically
    at commit or rollback. On SQLite the whole transaction already holds the
    database write lock (BEGIN IMMEDIATE), so nothing is done and False is
    returned.

    Returns:
        True if an advisory lock was taken.
    """
    if db.get_bind().dialect.name != "postgresql":
        return False

    db.execute(
        text("SELECT pg_advisory_xact_lock(:key)"),
        {"key": advisory_lock_key(f"songbattle_session:{session_id}")},
    )
    return True
