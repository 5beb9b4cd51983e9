"""Game Event Bus: in-process push notifications for live match observers.

Invariants:
    - Events are published only AFTER the store transaction committed
    - publish() never blocks and never raises: a full subscriber queue drops its oldest event
    - Subscriptions are per game; unsubscribe happens when the subscribe() context exits

Design Decisions:
    - asyncio.Queue per subscriber, no broker: single-process uvicorn, one mutator per game
    - Singleton event_bus initialized on startup, same lifecycle as db_manager
"""

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from app.core.domain_types import GameId

logger = logging.getLogger(__name__)


class GameEventBus:
    """Fan-out of game events to per-game subscriber queues."""

    def __init__(self, queue_size: int = 32):
        self.queue_size = queue_size
        self._subscribers: dict[GameId, set[asyncio.Queue]] = defaultdict(set)

    def publish(self, game_id: GameId, event: dict) -> int:
        """Deliver `event` to every subscriber of `game_id`. Returns delivery count."""
        queues = self._subscribers.get(game_id)
        if not queues:
            return 0
        for queue in queues:
            if queue.full():
                queue.get_nowait()
                logger.warning(
                    "Subscriber queue full, dropped oldest event",
                    extra={"game_id": str(game_id)},
                )
            queue.put_nowait(event)
        return len(queues)

    @asynccontextmanager
    async def subscribe(
        self, game_id: GameId,
    ) -> AsyncGenerator[asyncio.Queue, None]:
        """Register a queue for `game_id` for the lifetime of the context."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers[game_id].add(queue)
        try:
            yield queue
        finally:
            subscribers = self._subscribers.get(game_id)
            if subscribers is not None:
                subscribers.discard(queue)
                if not subscribers:
                    del self._subscribers[game_id]

    def subscriber_count(self, game_id: GameId) -> int:
        return len(self._subscribers.get(game_id, ()))


# Singleton (initialized on startup)
event_bus: GameEventBus | None = None


def init_event_bus(queue_size: int = 32) -> GameEventBus:
    global event_bus
    event_bus = GameEventBus(queue_size)
    return event_bus


def get_event_bus() -> GameEventBus:
    """FastAPI dependency for the process-wide event bus."""
    if not event_bus:
        raise RuntimeError("Event bus not initialized")
    return event_bus
