"""
Redis Cache - CacheStore implementation on top of redis.asyncio.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .interface import CacheStore
from ..core.exceptions import CacheError


def create_redis_client(uri: str) -> redis.Redis:
    """Create the shared, pooled client. Values are decoded to str."""
    return redis.Redis.from_url(uri, decode_responses=True)


class RedisCache(CacheStore):
    """Thin wrapper translating redis errors into CacheError."""

    def __init__(self, client: redis.Redis):
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.client.get(key)
        except RedisError as e:
            raise CacheError(f"GET {key} failed: {e}") from e

    async def set_ex(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.client.setex(key, ttl_seconds, value)
        except RedisError as e:
            raise CacheError(f"SETEX {key} failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise CacheError(f"DEL {key} failed: {e}") from e
