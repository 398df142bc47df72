"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.notation import PROMOTION_PIECES
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameResult


# --- REQUEST MODELS ---
class StartGameRequest(BaseModel):
    admin_color: Color


class MoveRequest(BaseModel):
    from_square: str
    to_square: str
    promotion: str = ""

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        def _is_algebraic_notation(value: str) -> bool:
            if len(value) != 2:
                return False

            first_character = value[0]
            second_character = value[1]
            if not (first_character.isalpha() and second_character.isnumeric()):
                return False
            return True

        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value

    @field_validator("promotion")
    @classmethod
    def validate_promotion(cls, value: str) -> str:
        """Blank when not promoting, otherwise one of Q, R, B, N"""
        value = value.strip()
        if value and value not in PROMOTION_PIECES:
            raise InvalidRequestError(
                f"Cannot promote to {value!r}. Pick one from {','.join(PROMOTION_PIECES)}"
            )
        return value


class FinishRequest(BaseModel):
    game_result: GameResult

    @field_validator("game_result", mode="before")
    @classmethod
    def validate_game_result(cls, value: str) -> str:
        if value not in [result.value for result in GameResult]:
            raise InvalidRequestError(
                f"Invalid game result: {value!r}. Pick one from {','.join(GameResult)}"
            )
        return value


# --- RESPONSE MODELS ---
class StartGameResponse(BaseModel):
    game_id: UUID


class MoveResponse(BaseModel):
    """Sent back to the mover and published to everyone watching the game."""

    player: Color
    from_square: str
    to_square: str
    promotion: str
    en_passant: bool
    result: Optional[GameResult]
    move_notation: str


class GameStateResponse(BaseModel):
    admin_color: Color
    state: list[list[str]]


class ActiveGameResponse(BaseModel):
    game_id: UUID
    admin_color: Color
    created_at: datetime
    last_moved: Optional[Color]


class MoveHistoryResponse(BaseModel):
    turn: int
    move_notation: str
    player: Color
