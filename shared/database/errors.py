"""Database error taxonomy.

None of these are retried; every failure is surfaced to the immediate caller.
"""
from typing import Optional


class DatabaseError(Exception):
    """Base class for data-access errors."""


class AlreadyStartedError(DatabaseError):
    """Pool start requested while a pool already exists."""

    def __init__(self, message: str = "Connection pool is already started"):
        super().__init__(message)


class NotStartedError(DatabaseError):
    """Pool used before start() (or after stop())."""

    def __init__(self, message: str = "Connection pool is not started"):
        super().__init__(message)


class StoreError(DatabaseError):
    """A statement failed in the store.

    The driver exception is kept as `original` and chained as `__cause__`.
    """

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original


class InsertFailedError(StoreError):
    """An insert ran without error but affected zero rows."""
