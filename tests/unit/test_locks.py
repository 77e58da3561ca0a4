"""Unit tests for session lock helpers."""

from songbattle.db.locks import acquire_session_lock, advisory_lock_key


def test_advisory_lock_key_is_stable_64bit_int():
    key_a1 = advisory_lock_key("songbattle_session:abc")
    key_a2 = advisory_lock_key("songbattle_session:abc")
    key_b = advisory_lock_key("songbattle_session:xyz")

    assert isinstance(key_a1, int)
    assert key_a1 == key_a2
    assert key_a1 != key_b
    assert -(2 ** 63) <= key_a1 < 2 ** 63


def test_session_lock_is_noop_on_sqlite(db_session):
    assert acquire_session_lock(db_session, "listener-a") is False
