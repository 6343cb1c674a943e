"""Errors raised by the aggregation core."""

from __future__ import annotations

from ..exceptions import InseasonError


class CoreError(InseasonError):
    """Base class for collection usage errors."""


class InvalidKey(CoreError, TypeError):
    """Raised when a collection is indexed with an unsupported key type."""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"unsupported taxon key {key!r} ({type(key).__name__})")


class TaxonMismatch(CoreError, ValueError):
    """Raised when merging records that belong to different taxa."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"cannot merge taxon {actual} into taxon {expected}")


class InsufficientSeasons(CoreError, ValueError):
    """Raised when a modern window leaves no older seasons to compare with."""

    def __init__(self, modern_window: int, season_count: int):
        self.modern_window = modern_window
        self.season_count = season_count
        super().__init__(
            f"modern window of {modern_window} season(s) needs more than "
            f"{season_count} season(s) of records"
        )
