"""
PostgreSQL Connection Module.

Manages the PostgreSQL connection pool lifecycle. The connection is built
explicitly at application startup and handed to the repositories.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg
from loguru import logger

from config.settings import PostgresSettings
from src.connections.schema import SCHEMA_STATEMENTS

pg_log = logger.bind(module="Postgres")


class PostgresConnection:
    """PostgreSQL connection manager."""

    def __init__(self, settings: PostgresSettings):
        """
        Initialize PostgreSQL connection.

        Args:
            settings: PostgreSQL settings
        """
        self.settings = settings
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> None:
        """Connect to PostgreSQL."""
        pg_log.info(f"Connecting to PostgreSQL at {self.settings.host}:{self.settings.port}")
        self._pool = await asyncpg.create_pool(
            host=self.settings.host,
            port=self.settings.port,
            user=self.settings.user,
            password=self.settings.password,
            database=self.settings.database,
            min_size=self.settings.pool_min,
            max_size=self.settings.pool_max,
        )
        pg_log.info("PostgreSQL connected successfully")

        if self.settings.auto_migrate:
            await self.ensure_schema()

    async def close(self) -> None:
        """Close PostgreSQL connection pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None
            pg_log.info("PostgreSQL connection closed")

    @property
    def pool(self) -> asyncpg.Pool:
        """Get connection pool."""
        if not self._pool:
            raise RuntimeError("PostgreSQL not connected. Call connect() first.")
        return self._pool

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Acquire a connection and open a transaction on it.

        The transaction commits when the block exits normally and rolls
        back on any exception, including cancellation.
        """
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                yield conn

    async def ensure_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        async with self.transaction() as conn:
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
        pg_log.info(f"Schema ensured ({len(SCHEMA_STATEMENTS)} statements)")

    async def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        async with self.pool.acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1
