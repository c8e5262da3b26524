"""Notification Publisher: ticket events published to Redis Pub/Sub.

Invariants:
    - publish(subject, payload) sends payload bytes unchanged to the channel named subject
    - Connection is lazy: the first publish connects if connect() was not called
    - Errors propagate to the caller; NotificationDispatcher decides to log and discard

Design Decisions:
    - Redis Pub/Sub as the broker: the subject maps 1:1 to a channel name
    - Client created from URL in the lifespan and closed on shutdown
"""

import logging

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class RedisNotificationPublisher:
    """Publishes raw payloads to Redis channels."""

    def __init__(self, redis_url: str):
        self._redis_url = redis_url
        self._redis: redis.Redis | None = None

    async def connect(self) -> None:
        if self._redis is not None:
            return
        self._redis = redis.from_url(self._redis_url)
        logger.info("Notification publisher connected to Redis")

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("Notification publisher disconnected from Redis")

    async def publish(self, subject: str, payload: bytes) -> None:
        if self._redis is None:
            await self.connect()
        receivers = await self._redis.publish(subject, payload)
        logger.debug(
            f"Published {len(payload)} bytes to {subject} ({receivers} receivers)",
            extra={"subject": subject},
        )
