"""Base repository with connection pooling."""
from contextlib import asynccontextmanager
from typing import AsyncIterator

import asyncpg

from shared.database.pool import ConnectionPool


class BaseRepository:
    """Base repository with connection pooling.

    All repositories MUST inherit from this class and run their statements
    inside `async with self.connection() as conn:` so every connection goes
    back to the pool, whatever the exit path.
    """

    def __init__(self, pool: ConnectionPool):
        """Initialize repository with connection pool.

        Args:
            pool: Started (or to-be-started) ConnectionPool
        """
        self.pool = pool

    async def get_connection(self) -> asyncpg.Connection:
        """Get connection from pool."""
        return await self.pool.acquire()

    async def release_connection(self, conn: asyncpg.Connection):
        """Release connection back to pool."""
        await self.pool.release(conn)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire one connection for the duration of the block."""
        conn = await self.get_connection()
        try:
            yield conn
        finally:
            await self.release_connection(conn)
