"""Unit tests for src/services/broadcast.py"""

import json
from unittest.mock import Mock
from uuid import uuid4

from src.api.models import MoveResponse
from src.core.shared_types import Color, GameResult
from src.services.broadcast import InMemoryBroadcaster

MOVE = MoveResponse(
    player=Color.WHITE,
    from_square="e2",
    to_square="e4",
    promotion="",
    en_passant=False,
    result=None,
    move_notation="e4",
)


def test_subscribers_receive_moves_of_their_game_only() -> None:
    broadcaster = InMemoryBroadcaster()
    game_id, other_game_id = uuid4(), uuid4()
    watcher, other_watcher = Mock(), Mock()
    broadcaster.subscribe(game_id, watcher)
    broadcaster.subscribe(other_game_id, other_watcher)

    broadcaster.publish_move(game_id, MOVE)

    watcher.assert_called_once()
    message = json.loads(watcher.call_args.args[0])
    assert message["move_notation"] == "e4"
    assert message["player"] == "white"
    other_watcher.assert_not_called()


def test_result_is_published() -> None:
    broadcaster = InMemoryBroadcaster()
    game_id = uuid4()
    watcher = Mock()
    broadcaster.subscribe(game_id, watcher)

    broadcaster.publish_result(game_id, GameResult.BLACK_WON)
    assert json.loads(watcher.call_args.args[0]) == {"game_result": "0-1"}


def test_unsubscribe() -> None:
    broadcaster = InMemoryBroadcaster()
    game_id = uuid4()
    watcher = Mock()
    unsubscribe = broadcaster.subscribe(game_id, watcher)
    assert broadcaster.subscriber_count(game_id) == 1

    unsubscribe()
    # calling it twice is harmless
    unsubscribe()
    broadcaster.publish_move(game_id, MOVE)

    watcher.assert_not_called()
    assert broadcaster.subscriber_count(game_id) == 0


def test_failing_subscriber_does_not_stop_delivery() -> None:
    broadcaster = InMemoryBroadcaster()
    game_id = uuid4()
    broken = Mock(side_effect=ConnectionError("socket closed"))
    healthy = Mock()
    broadcaster.subscribe(game_id, broken)
    broadcaster.subscribe(game_id, healthy)

    broadcaster.publish_move(game_id, MOVE)

    broken.assert_called_once()
    healthy.assert_called_once()


def test_publish_without_subscribers() -> None:
    InMemoryBroadcaster().publish_move(uuid4(), MOVE)
