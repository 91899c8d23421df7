"""
Redis cache client for nearby-search results.

Caching is optional: when Redis is disabled in settings or unreachable every
operation degrades to a miss, and callers fall back to the database.
"""

import asyncio
import logging
from typing import Optional

from redis import asyncio as aioredis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from heritage_map.config.settings import get_settings

logger = logging.getLogger(__name__)


class CacheClient:
    """Redis cache client with lazy connection and graceful degradation."""

    def __init__(self, redis_url: Optional[str] = None, max_retries: int = 3):
        self.redis_url = redis_url or get_settings().redis.url
        self.redis_client: Optional[Redis] = None
        self._connection_lock = asyncio.Lock()
        self._is_connected = False
        self._connection_retries = 0
        self._max_retries = max_retries

    async def connect(self) -> bool:
        """
        Establish connection to Redis server.

        Returns:
            True if connection successful, False otherwise
        """
        async with self._connection_lock:
            if self._is_connected and self.redis_client:
                return True

            try:
                logger.info(f"Connecting to Redis at {self.redis_url}")
                self.redis_client = aioredis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=get_settings().redis.socket_timeout,
                    socket_connect_timeout=get_settings().redis.socket_timeout,
                )
                await self.redis_client.ping()
                self._is_connected = True
                self._connection_retries = 0
                logger.info("Successfully connected to Redis")
                return True

            except (RedisError, OSError) as e:
                self._connection_retries += 1
                logger.error(
                    f"Failed to connect to Redis (attempt {self._connection_retries}): {e}"
                )
                await self._drop_client()
                return False

    async def disconnect(self) -> None:
        """Disconnect from Redis server."""
        async with self._connection_lock:
            if self.redis_client:
                await self._drop_client()
                logger.info("Disconnected from Redis")

    async def get(self, key: str) -> Optional[str]:
        """Cached value, or None on miss or any cache failure."""
        if not await self._ensure_connection():
            return None

        try:
            value = await self.redis_client.get(key)
            logger.debug(f"Cache {'hit' if value else 'miss'} for key: {key}")
            return value
        except (RedisError, OSError) as e:
            logger.warning(f"Error getting cache key '{key}': {e}")
            await self._drop_client()
            return None

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> bool:
        if not await self._ensure_connection():
            return False

        try:
            if ttl_seconds:
                result = await self.redis_client.setex(key, ttl_seconds, value)
            else:
                result = await self.redis_client.set(key, value)
            return bool(result)
        except (RedisError, OSError) as e:
            logger.warning(f"Error setting cache key '{key}': {e}")
            await self._drop_client()
            return False

    async def ping(self) -> bool:
        if not await self._ensure_connection():
            return False

        try:
            return await self.redis_client.ping() is True
        except (RedisError, OSError) as e:
            logger.warning(f"Redis ping failed: {e}")
            await self._drop_client()
            return False

    async def _ensure_connection(self) -> bool:
        if self._is_connected and self.redis_client:
            return True

        if self._connection_retries >= self._max_retries:
            return False

        return await self.connect()

    async def _drop_client(self) -> None:
        self._is_connected = False
        client, self.redis_client = self.redis_client, None
        if client is not None:
            try:
                await client.aclose()
            except (RedisError, OSError) as e:
                logger.debug(f"Ignoring error while closing Redis client: {e}")

    @property
    def is_connected(self) -> bool:
        return self._is_connected and self.redis_client is not None


def nearby_cache_key(origin_key: str, radius_km: float) -> str:
    return f"nearby:{origin_key}:{radius_km}"


# Global cache client instance
cache_client: Optional[CacheClient] = None


def get_cache_client() -> Optional[CacheClient]:
    """
    Get or create the global cache client instance.

    Returns:
        CacheClient instance, or None when Redis caching is disabled
    """
    global cache_client

    if not get_settings().redis.enabled:
        return None

    if cache_client is None:
        cache_client = CacheClient()

    return cache_client


async def close_cache_client() -> None:
    """Close the global cache client connection."""
    global cache_client

    if cache_client:
        await cache_client.disconnect()
        cache_client = None
