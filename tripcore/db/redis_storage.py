"""Redis implementation of the blob store."""

import logging

import redis
import redis.asyncio

from tripcore.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class RedisBlobStore:
    """Redis-based blob store using plain GET / SET."""

    def __init__(self, redis_client: redis.asyncio.Redis, namespace: str = "tripcore") -> None:
        """Initialize blob store.

        Args:
            redis_client: Async Redis client
            namespace: Prefix applied to every key
        """
        self._redis = redis_client
        self._namespace = namespace

    def _redis_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def read(self, key: str) -> str | None:
        """Read a blob."""
        try:
            value = await self._redis.get(self._redis_key(key))
        except redis.RedisError as e:
            logger.error(f"[RedisBlobStore.read] key={key} failed: {e}")
            raise StorageReadError(key, str(e)) from e

        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def write(self, key: str, blob: str) -> None:
        """Write a blob."""
        try:
            await self._redis.set(self._redis_key(key), blob)
        except redis.RedisError as e:
            logger.error(f"[RedisBlobStore.write] key={key} failed: {e}")
            raise StorageWriteError(key, str(e)) from e
