import json
import logging
from typing import Any, Awaitable, Callable, Optional
from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

class CacheClient:
    """get-or-set wrapper over Redis. With no backend every call goes to the factory."""

    def __init__(self, redis: Optional[Redis] = None, prefix: str = "qaskills:"):
        self.redis = redis
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str) -> "CacheClient":
        if not url:
            logger.info("REDIS_URL not set, caching disabled")
            return cls(None)
        return cls(Redis.from_url(url, decode_responses=True))

    async def get_or_set(self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl_seconds: int = 300,
    ) -> Any:
        """Return the cached JSON value for key, or compute it with factory and store it."""
        if self.redis is None:
            return await factory()

        cache_key = f"{self.prefix}{key}"
        try:
            cached = await self.redis.get(cache_key)
            if cached is not None:
                return json.loads(cached)
        except (RedisError, ValueError) as e:
            logger.warning("Cache read failed for %s: %s", cache_key, e)

        value = await factory()
        try:
            await self.redis.set(cache_key, json.dumps(value, default=str), ex=ttl_seconds)
        except (RedisError, TypeError) as e:
            logger.warning("Cache write failed for %s: %s", cache_key, e)
        return value

    async def close(self):
        if self.redis is not None:
            await self.redis.aclose()
