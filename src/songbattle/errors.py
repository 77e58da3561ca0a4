"""Error types raised by the rating and matchmaking core."""


class SongBattleError(Exception):
    """Base class for all SongBattle errors."""
    pass


class InvalidOutcome(SongBattleError):
    """
    Raised when a reported battle outcome is not acceptable.

    Covers a missing winner/loser id, an id that is not in the catalog,
    and a winner that is also the loser. This is a client error and
    should not be retried.
    """
    pass


class InsufficientCatalog(SongBattleError):
    """Raised when fewer than two songs exist to pair. A configuration error."""

    def __init__(self, song_count: int):
        self.song_count = song_count
        super().__init__(f"Need at least 2 songs to make a battle, catalog has {song_count}")


class StorageFailure(SongBattleError):
    """
    Raised when persisting a battle outcome fails.

    The whole outcome is rolled back. Retrying is allowed but not
    idempotent: a retry of an outcome that did land counts it twice.
    """
    pass
