# serilovers/redis_client.py
import json
import logging
from typing import Any, Optional

import redis.asyncio as redis

from .config import settings

logger = logging.getLogger(__name__)


class RedisClient:
    """
    Lazily connected redis.asyncio wrapper used as the domain event bus.

    The pool is created on first use, so importing the app never needs a
    running Redis. Publishing errors propagate; the event publisher owns
    retries and swallowing.
    """

    POOL_SIZE = 20

    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.REDIS_URL
        self.redis: Optional[redis.Redis] = None
        self.pool: Optional[redis.ConnectionPool] = None

    @property
    def connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        if self.connected:
            return

        pool = redis.ConnectionPool.from_url(
            self.url,
            decode_responses=True,
            max_connections=self.POOL_SIZE,
            socket_connect_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        client = redis.Redis(connection_pool=pool)
        try:
            await client.ping()
        except Exception as e:
            logger.error(f"❌ Event bus unreachable at {self.url}: {e}")
            await pool.disconnect()
            raise

        self.pool, self.redis = pool, client
        logger.info("✅ Event bus connected")

    async def disconnect(self) -> None:
        client, pool = self.redis, self.pool
        self.redis = self.pool = None
        try:
            if client:
                await client.close()
            if pool:
                await pool.disconnect()
            logger.info("✅ Event bus disconnected")
        except Exception as e:
            logger.error(f"❌ Event bus disconnect error: {e}")

    async def ping(self) -> bool:
        """Health probe; never raises"""
        try:
            await self.connect()
            return bool(await self.redis.ping())
        except Exception as e:
            logger.error(f"❌ Redis ping failed: {e}")
            return False

    async def publish(self, channel: str, message: Any) -> int:
        """
        Publish on a pub/sub channel and return the subscriber count.
        Dicts and lists are sent as JSON.
        """
        await self.connect()
        if not isinstance(message, (str, bytes)):
            message = json.dumps(message, default=str)
        return await self.redis.publish(channel, message)


# Global client shared by the event publisher and the health checks
redis_client = RedisClient()
