"""Redis connection pool management.

The pool is owned by whoever creates the manager (the Redis event broker),
so its lifetime follows the application rather than module import.
"""

from __future__ import annotations

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from .logging import get_logger

logger = get_logger(__name__)


class RedisPoolManager:
    """Owns one Redis connection pool and the client bound to it."""

    def __init__(self, redis_url: str, max_connections: int = 50):
        self._pool: ConnectionPool | None = redis.ConnectionPool.from_url(
            redis_url,
            decode_responses=True,
            max_connections=max_connections,
            socket_connect_timeout=5,
            health_check_interval=30,
        )
        self._client: redis.Redis | None = redis.Redis(connection_pool=self._pool)

        logger.info(
            "Redis connection pool initialized",
            max_connections=max_connections,
            health_check_interval=30,
        )

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client with connection pooling."""
        if self._client is None:
            raise RuntimeError("Redis pool not initialized")
        return self._client

    async def close(self):
        """Close the Redis connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Redis client closed")
        if self._pool:
            await self._pool.disconnect()
            self._pool = None
            logger.info("Redis connection pool disconnected")

    async def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            if self._client is None:
                logger.error("Redis client not initialized")
                return False
            await self._client.ping()
            return True
        except Exception as e:
            logger.error("Redis health check failed", error=str(e))
            return False
