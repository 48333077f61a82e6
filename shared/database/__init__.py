"""Database infrastructure."""
from .base_repository import BaseRepository
from .errors import (
    AlreadyStartedError,
    DatabaseError,
    InsertFailedError,
    NotStartedError,
    StoreError,
)
from .pool import ConnectionPool, PoolConfig, create_pool, close_pool

__all__ = [
    "BaseRepository",
    "ConnectionPool",
    "PoolConfig",
    "create_pool",
    "close_pool",
    "DatabaseError",
    "AlreadyStartedError",
    "NotStartedError",
    "StoreError",
    "InsertFailedError",
]
