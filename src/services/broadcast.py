"""
Fan-out of game events to everyone watching a game.

Subscribers are plain callbacks receiving the JSON text of the event. A transport (e.g. a websocket handler)
registers one callback per connection and calls the returned function once the connection closes.
"""

import threading
from collections import defaultdict
from typing import Callable, Protocol
from uuid import UUID

from src.api.models import FinishRequest, MoveResponse
from src.core.logging_setup import get_logger
from src.core.shared_types import GameResult

logger = get_logger(__name__)

Subscriber = Callable[[str], None]
Unsubscribe = Callable[[], None]


class MoveBroadcaster(Protocol):
    def publish_move(self, game_id: UUID, move: MoveResponse) -> None: ...

    def publish_result(self, game_id: UUID, result: GameResult) -> None: ...


class InMemoryBroadcaster:
    """Subscribers per game, kept in memory of this process only."""

    def __init__(self) -> None:
        self._subscribers: dict[UUID, list[Subscriber]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, game_id: UUID, subscriber: Subscriber) -> Unsubscribe:
        with self._lock:
            self._subscribers[game_id].append(subscriber)

        def unsubscribe() -> None:
            with self._lock:
                subscribers = self._subscribers.get(game_id, [])
                if subscriber in subscribers:
                    subscribers.remove(subscriber)
                if not subscribers:
                    self._subscribers.pop(game_id, None)

        return unsubscribe

    def subscriber_count(self, game_id: UUID) -> int:
        with self._lock:
            return len(self._subscribers.get(game_id, []))

    def publish_move(self, game_id: UUID, move: MoveResponse) -> None:
        self._publish(game_id, move.model_dump_json())

    def publish_result(self, game_id: UUID, result: GameResult) -> None:
        self._publish(game_id, FinishRequest(game_result=result).model_dump_json())

    def _publish(self, game_id: UUID, message: str) -> None:
        # deliver outside the lock: a subscriber may unsubscribe while being called
        with self._lock:
            subscribers = list(self._subscribers.get(game_id, []))

        for subscriber in subscribers:
            try:
                subscriber(message)
            except Exception:
                logger.exception("subscriber_delivery_failed", game_id=str(game_id))
