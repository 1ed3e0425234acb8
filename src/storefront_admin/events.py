"""Lifecycle notifications fired around admin mutations."""

from __future__ import annotations

import inspect
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from .logging import get_logger

if TYPE_CHECKING:
    import redis.asyncio as redis

logger = get_logger(__name__)

ADMIN_CREATE_BEFORE = "user.admin.create.before"
ADMIN_CREATE_AFTER = "user.admin.create.after"
ADMIN_UPDATE_BEFORE = "user.admin.update.before"
ADMIN_UPDATE_AFTER = "user.admin.update.after"
ADMIN_UPDATE_PASSWORD = "user.admin.update-password"
ADMIN_DELETE_BEFORE = "user.admin.delete.before"
ADMIN_DELETE_AFTER = "user.admin.delete.after"

WILDCARD = "*"


@dataclass(frozen=True)
class LifecycleEvent:
    name: str
    payload: Any = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))


EventHandler = Callable[[LifecycleEvent], Awaitable[None] | None]


class EventDispatcher:
    """In-process dispatcher for lifecycle events.

    Handlers run in subscription order before ``dispatch`` returns, so a
    ``*.before`` subscriber always observes the record prior to the mutation.
    Return values are ignored; exceptions propagate to the caller.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, name: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``name`` (or ``"*"`` for every event)."""
        self._handlers[name].append(handler)

    def unsubscribe(self, name: str, handler: EventHandler) -> None:
        if handler in self._handlers.get(name, []):
            self._handlers[name].remove(handler)

    async def dispatch(self, name: str, payload: Any = None) -> LifecycleEvent:
        event = LifecycleEvent(name=name, payload=payload)
        handlers = [*self._handlers.get(name, []), *self._handlers.get(WILDCARD, [])]

        logger.debug("Dispatching lifecycle event", event_name=name, handlers=len(handlers))

        for handler in handlers:
            result = handler(event)
            if inspect.isawaitable(result):
                await result

        return event


class LifecycleMessage(BaseModel):
    """Wire form of a lifecycle event published to Redis."""

    event: str
    admin_id: int | None = None
    occurred_at: datetime


class RedisEventPublisher:
    """Subscriber that republishes lifecycle events on a Redis pub/sub channel."""

    def __init__(self, client: redis.Redis, channel: str = "admin:events") -> None:
        self._redis = client
        self.channel = channel

    async def __call__(self, event: LifecycleEvent) -> None:
        message = LifecycleMessage(
            event=event.name,
            admin_id=_admin_id_of(event.payload),
            occurred_at=event.occurred_at,
        )
        await self._redis.publish(self.channel, message.model_dump_json())
        logger.debug("Lifecycle event published", channel=self.channel, event_name=event.name)


def _admin_id_of(payload: Any) -> int | None:
    if payload is None:
        return None
    if isinstance(payload, int):
        return payload
    return getattr(payload, "id", None)


def build_dispatcher(redis_url: str | None = None, channel: str = "admin:events") -> EventDispatcher:
    """Create a dispatcher, attaching the Redis publisher when ``redis_url`` is set."""
    dispatcher = EventDispatcher()
    if redis_url:
        import redis.asyncio as redis

        client = redis.Redis.from_url(redis_url, decode_responses=True)
        dispatcher.subscribe(WILDCARD, RedisEventPublisher(client, channel))
        logger.info("Lifecycle events will be published to Redis", channel=channel)
    return dispatcher
