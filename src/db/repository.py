"""Protocol repository (can implement later for another storage backend)"""

from typing import Optional, Protocol
from uuid import UUID

from src.core.models import ActiveGame, GameRecord, MoveRecord
from src.core.shared_types import Color, GameResult


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def create_game(self, game_id: UUID, admin_color: Color) -> GameRecord:
        """Store a new game, without a result."""
        ...

    def insert_move(
        self,
        game_id: UUID,
        turn: int,
        move_notation: str,
        player: Color,
        result: Optional[GameResult] = None,
    ) -> MoveRecord:
        """Record a single accepted move, together with the result if the move ended the game. All or nothing."""
        ...

    def finish_game(self, game_id: UUID, result: GameResult) -> GameRecord:
        """Store the final result of a game."""
        ...

    def get_moves(self, game_id: UUID) -> list[MoveRecord]:
        """All moves of a game, in the order they were made."""
        ...

    def get_active_games(self) -> list[ActiveGame]:
        """Games without a result, together with the color that moved last."""
        ...

    def game_exists(self, game_id: UUID) -> bool: ...
