"""Publish/subscribe brokers carrying serialized envelopes between channels.

A broker is created once per application and handed to the topics that use
it. Messages are plain strings; topics own the (de)serialization.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator

from ..config import Settings
from ..logging import get_logger
from ..redis_pool import RedisPoolManager

logger = get_logger(__name__)


class EventBroker(ABC):
    """Fan-out of string messages to every live subscriber of a channel."""

    @abstractmethod
    async def publish(self, channel: str, message: str) -> None:
        """Deliver ``message`` to every subscriber currently listening on ``channel``."""

    @abstractmethod
    def subscribe(self, channel: str) -> AsyncGenerator[str, None]:
        """Open a new subscription on ``channel``.

        The returned iterator only sees messages published after it has
        started; there is no backlog. Closing it releases the subscription.
        """

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        return None


class InMemoryBroker(EventBroker):
    """Broker for a single process, one unbounded queue per subscriber."""

    def __init__(self) -> None:
        self._subscribers: dict[str, set[asyncio.Queue[str]]] = {}

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, ()))

    async def publish(self, channel: str, message: str) -> None:
        queues = self._subscribers.get(channel)
        if not queues:
            logger.debug("No subscribers, dropping message", channel=channel)
            return

        for queue in list(queues):
            queue.put_nowait(message)

    async def subscribe(self, channel: str) -> AsyncGenerator[str, None]:
        queue: asyncio.Queue[str] = asyncio.Queue()
        self._subscribers.setdefault(channel, set()).add(queue)
        logger.debug("Subscribed to channel", channel=channel)
        try:
            while True:
                yield await queue.get()
        finally:
            queues = self._subscribers.get(channel)
            if queues is not None:
                queues.discard(queue)
                if not queues:
                    del self._subscribers[channel]
            logger.debug("Unsubscribed from channel", channel=channel)

    async def close(self) -> None:
        self._subscribers.clear()


class RedisBroker(EventBroker):
    """Broker backed by Redis pub/sub, shared by every process on the same Redis."""

    def __init__(self, pool_manager: RedisPoolManager) -> None:
        self._pool_manager = pool_manager

    async def publish(self, channel: str, message: str) -> None:
        receivers = await self._pool_manager.client.publish(channel, message)
        logger.debug("Published to Redis channel", channel=channel, receivers=receivers)

    async def subscribe(self, channel: str) -> AsyncGenerator[str, None]:
        pubsub = self._pool_manager.client.pubsub()
        await pubsub.subscribe(channel)
        logger.info("Subscribed to Redis channel", channel=channel)
        try:
            async for msg in pubsub.listen():
                if msg.get("type") == "message":
                    yield msg["data"]
        finally:
            logger.info("Cleaning up Redis subscription", channel=channel)
            await pubsub.unsubscribe(channel)
            await pubsub.aclose()

    async def health_check(self) -> bool:
        return await self._pool_manager.health_check()

    async def close(self) -> None:
        await self._pool_manager.close()


def create_broker(settings: Settings) -> EventBroker:
    """Build the broker selected by ``settings.event_broker``."""
    if settings.event_broker == "redis":
        logger.info("Using Redis event broker", redis_url=settings.redis_url)
        return RedisBroker(RedisPoolManager(settings.redis_url))

    logger.info("Using in-process event broker")
    return InMemoryBroker()
