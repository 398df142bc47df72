"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import threading
from contextlib import nullcontext
from copy import deepcopy
from typing import Optional
from uuid import UUID, uuid4

from src.api.models import (
    ActiveGameResponse,
    FinishRequest,
    GameStateResponse,
    MoveHistoryResponse,
    MoveRequest,
    MoveResponse,
    StartGameRequest,
    StartGameResponse,
)
from src.chess.game import Game
from src.core.exceptions import GameStateError, MoveError, RepositoryError
from src.core.logging_setup import get_logger
from src.core.models import MoveOutcome
from src.db.repository import GameRepository
from src.services.broadcast import MoveBroadcaster

logger = get_logger(__name__)


class ChessService:
    """
    Orchestration of layers for chess game.

    Games being played live in memory, one lock per game: moves on the same game are applied one at a time,
    different games do not wait for each other. Every accepted move is persisted before it becomes visible.
    """

    def __init__(
        self, repository: GameRepository, broadcaster: Optional[MoveBroadcaster] = None
    ) -> None:
        self.repo = repository
        self.broadcaster = broadcaster
        self._games: dict[UUID, Game] = {}
        self._locks: dict[UUID, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        # the repository wraps a single database session, which must not be shared between threads
        self._repo_lock = threading.Lock()

    # -- API routes logic ---
    def start_game(self, request: StartGameRequest) -> StartGameResponse:
        """The administrator starts a new game, playing the indicated color."""
        game_id = uuid4()
        with self._repo_lock:
            self.repo.create_game(game_id, request.admin_color)

        with self._registry_lock:
            self._games[game_id] = Game.new_game(request.admin_color)
            self._locks[game_id] = threading.Lock()

        logger.info("game_started", game_id=str(game_id), admin_color=str(request.admin_color))
        return StartGameResponse(game_id=game_id)

    def get_game_state(self, game_id: UUID) -> GameStateResponse:
        """Current board, e.g. for a viewer that just connected."""
        game, lock = self._live_game(game_id)
        with lock:
            return GameStateResponse(
                admin_color=game.admin_color, state=game.serialize_board()
            )

    def make_move(self, game_id: UUID, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----
        1. refuse games that already concluded
        2. validate + apply the move on a copy of the game
        3. store the move (and the result, if this move ended the game)
        4. only then replace the live game by the copy (a finished game is dropped from memory instead)
        5. let everyone watching know
        """
        _, lock = self._live_game(game_id)
        with lock:
            # re-read under the lock: another request might have replaced the game in the meantime
            game = self._games.get(game_id)
            if game is None:
                raise GameStateError(f"Game {game_id} is no longer being played.")
            if game.is_concluded:
                raise GameStateError(f"Game {game_id} has concluded: {game.result}")

            candidate = deepcopy(game)
            try:
                outcome = candidate.validate_and_make_move(
                    request.from_square, request.to_square, request.promotion
                )
            except MoveError as exc:
                logger.warning(
                    "move_rejected",
                    game_id=str(game_id),
                    from_square=request.from_square,
                    to_square=request.to_square,
                    code=exc.code,
                    reason=exc.detail,
                )
                raise

            self._persist(game_id, outcome)
            if outcome.result is None:
                self._games[game_id] = candidate
            else:
                self._drop_live_game(game_id)

            logger.info(
                "move_accepted",
                game_id=str(game_id),
                turn=outcome.turn_number,
                player=str(outcome.player),
                move=outcome.move_notation,
            )
            response = self._create_move_response(request, outcome)
            if self.broadcaster is not None:
                self.broadcaster.publish_move(game_id, response)
                if outcome.result is not None:
                    self.broadcaster.publish_result(game_id, outcome.result)
        return response

    def finish_game(self, game_id: UUID, request: FinishRequest) -> None:
        """The administrator ends a game (e.g. by resignation) with the given result."""
        with self._registry_lock:
            lock = self._locks.get(game_id)

        # a move being applied right now completes first
        with lock or nullcontext():
            with self._repo_lock:
                self.repo.finish_game(game_id, request.game_result)

            self._drop_live_game(game_id)

        logger.info("game_finished", game_id=str(game_id), result=str(request.game_result))
        if self.broadcaster is not None:
            self.broadcaster.publish_result(game_id, request.game_result)

    def list_active_games(self) -> list[ActiveGameResponse]:
        with self._repo_lock:
            active_games = self.repo.get_active_games()
        return [
            ActiveGameResponse(
                game_id=active.game_id,
                admin_color=active.admin_color,
                created_at=active.created_at,
                last_moved=active.last_moved,
            )
            for active in active_games
        ]

    def get_move_history(self, game_id: UUID) -> list[MoveHistoryResponse]:
        with self._repo_lock:
            if not self.repo.game_exists(game_id):
                raise RepositoryError(f"Game with {game_id=} not found.")
            moves = self.repo.get_moves(game_id)
        return [
            MoveHistoryResponse(
                turn=move.turn, move_notation=move.move_notation, player=move.player
            )
            for move in moves
        ]

    # -- Internal helpers --
    def _live_game(self, game_id: UUID) -> tuple[Game, threading.Lock]:
        """Attempt to find the game being played and raise error if it fails."""
        with self._registry_lock:
            game = self._games.get(game_id)
            lock = self._locks.get(game_id)
        if game is not None and lock is not None:
            return game, lock

        with self._repo_lock:
            exists = self.repo.game_exists(game_id)
        if exists:
            raise GameStateError(f"Game {game_id} is no longer being played.")
        raise RepositoryError(f"Game with {game_id=} not found.")

    def _drop_live_game(self, game_id: UUID) -> None:
        """A finished game is no longer kept in memory, its record stays in the repository."""
        with self._registry_lock:
            self._games.pop(game_id, None)
            self._locks.pop(game_id, None)

    def _persist(self, game_id: UUID, outcome: MoveOutcome) -> None:
        with self._repo_lock:
            self.repo.insert_move(
                game_id,
                outcome.turn_number,
                outcome.move_notation,
                outcome.player,
                result=outcome.result,
            )
        if outcome.result is not None:
            logger.info("game_finished", game_id=str(game_id), result=str(outcome.result))

    def _create_move_response(
        self, request: MoveRequest, outcome: MoveOutcome
    ) -> MoveResponse:
        return MoveResponse(
            player=outcome.player,
            from_square=request.from_square,
            to_square=request.to_square,
            promotion=request.promotion,
            en_passant=outcome.en_passant,
            result=outcome.result,
            move_notation=outcome.move_notation,
        )
