"""Database connection pool management."""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg
from pydantic import BaseModel, Field

from config.settings import Settings
from shared.database.errors import AlreadyStartedError, NotStartedError
from shared.observability.logger import get_logger

logger = get_logger("shared.database.pool")


class PoolConfig(BaseModel):
    """Connection settings consumed once by ConnectionPool.start()."""
    host: str
    database: str
    port: int = Field(..., gt=0)
    user: str
    password: str = Field(..., repr=False)
    min_size: int = Field(1, ge=0)
    max_size: int = Field(10, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PoolConfig":
        return cls(
            host=settings.db_host,
            database=settings.db_database,
            port=settings.db_port,
            user=settings.db_user,
            password=settings.db_password,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )


class ConnectionPool:
    """Owns one asyncpg pool for its lifetime.

    Lifecycle: Uninitialized -> start() -> Started -> stop() -> Uninitialized.
    The instance is constructed explicitly and handed to repositories; a
    stopped pool may be started again.
    """

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None
        # Pool being closed by stop(); connections checked out before stop
        # began are still released into it.
        self._draining: Optional[asyncpg.Pool] = None
        self._lifecycle_lock = asyncio.Lock()

    @property
    def started(self) -> bool:
        return self._pool is not None

    async def start(self, config: PoolConfig) -> None:
        """Create the underlying pool.

        Raises:
            AlreadyStartedError: If the pool is already started
        """
        if self._pool is not None or self._lifecycle_lock.locked():
            raise AlreadyStartedError()

        async with self._lifecycle_lock:
            self._pool = await asyncpg.create_pool(
                host=config.host,
                port=config.port,
                user=config.user,
                password=config.password,
                database=config.database,
                min_size=config.min_size,
                max_size=config.max_size,
            )

        logger.info("Database pool created", data={
            "host": config.host,
            "port": config.port,
            "database": config.database,
            "max_size": config.max_size
        })

    async def acquire(self) -> asyncpg.Connection:
        """Get a connection, waiting until one is free.

        Raises:
            NotStartedError: If the pool is not started
        """
        if self._pool is None:
            raise NotStartedError()
        return await self._pool.acquire()

    async def release(self, conn: asyncpg.Connection) -> None:
        """Return a connection obtained from acquire()."""
        pool = self._pool or self._draining
        if pool is None:
            raise NotStartedError()
        await pool.release(conn)

    async def stop(self) -> None:
        """Close all connections. No-op when not started."""
        async with self._lifecycle_lock:
            pool = self._pool
            if pool is None:
                return

            self._pool = None
            self._draining = pool
            try:
                await pool.close()
            finally:
                self._draining = None

        logger.info("Database pool closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[asyncpg.Connection]:
        """Scoped acquisition: the connection is released on every exit path."""
        conn = await self.acquire()
        try:
            yield conn
        finally:
            await self.release(conn)


async def create_pool(settings: Settings) -> ConnectionPool:
    """Create and start a connection pool from application settings."""
    pool = ConnectionPool()
    await pool.start(PoolConfig.from_settings(settings))
    return pool


async def close_pool(pool: ConnectionPool):
    """Close database connection pool."""
    await pool.stop()
