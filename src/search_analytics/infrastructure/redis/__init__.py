"""Read-only token storage on Redis, with graceful degradation."""

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError

from search_analytics.config import Settings, get_settings

logger = structlog.get_logger()


class RedisKeyValueStorage:
    """Reads stored tokens from Redis. Every read returns None without a client.

    Read errors propagate; ``StorageTokenSource`` turns them into "no token".
    """

    def __init__(self, client: aioredis.Redis | None):
        self.client = client

    @classmethod
    async def connect(cls, settings: Settings | None = None) -> "RedisKeyValueStorage":
        """Connect to the configured Redis; fall back to an empty storage if unreachable."""
        settings = settings or get_settings()
        client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        try:
            await client.ping()
        except RedisError as e:
            logger.warning("Redis unavailable, token storage disabled", error=str(e))
            await client.aclose()
            return cls(None)

        logger.info("Token storage connected", redis_host=settings.redis_host)
        return cls(client)

    async def get(self, key: str) -> str | None:
        if not self.client:
            return None
        return await self.client.get(key)

    async def aclose(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None
